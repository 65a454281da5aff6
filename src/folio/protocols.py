"""Capability protocols for the render boundary.

A sink is anything with a ``write(bytes)`` method; a token source is
anything with an ``issue_token(request)`` method. No base class required.
The renderer checks the shape, not the lineage, so alternate transports
plug in without depending on folio::

    class ResponseBody:
        def __init__(self) -> None:
            self.chunks: list[bytes] = []

        def write(self, data: bytes) -> int:
            self.chunks.append(data)
            return len(data)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Writable(Protocol):
    """Byte-writable output sink (file, socket wrapper, response body)."""

    def write(self, data: bytes, /) -> object: ...


@runtime_checkable
class TokenSource(Protocol):
    """Issues the anti-forgery token for a request.

    The request is opaque to folio; only the token source interprets it.
    """

    def issue_token(self, request: Any, /) -> str: ...
