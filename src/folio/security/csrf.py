"""Session-backed anti-forgery tokens.

Generates a random token per session and hands it to the renderer, which
stores it on ``ViewData.csrf_token`` before every render. Validating the
token on submission belongs to the transport layer.

Usage::

    from folio.security import SessionTokenSource

    renderer = Renderer(config, SessionTokenSource())

Templates::

    <form method="post">
        {{ csrf_field(csrf_token) }}
        ...
    </form>

Any object with an ``issue_token(request) -> str`` method can replace
this one.
"""

import secrets
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any

from folio.errors import ConfigurationError

type SessionAccessor = Callable[[Any], MutableMapping[str, Any]]


@dataclass(frozen=True, slots=True)
class CSRFConfig:
    """Token source configuration.

    Attributes:
        session_key: Key used to store the token in the session.
        token_length: Length of the random token in bytes (hex-encoded).
    """

    session_key: str = "_csrf_token"
    token_length: int = 32


def request_session(request: Any) -> MutableMapping[str, Any]:
    """Default accessor: the request's ``session`` attribute."""
    session = getattr(request, "session", None)
    if session is None:
        msg = (
            "SessionTokenSource needs a request with a 'session' mapping. "
            "Pass session=... to read the session some other way."
        )
        raise ConfigurationError(msg)
    return session


class SessionTokenSource:
    """Issue one token per session, generating it on first use."""

    __slots__ = ("_config", "_session")

    def __init__(
        self,
        config: CSRFConfig | None = None,
        *,
        session: SessionAccessor = request_session,
    ) -> None:
        self._config = config or CSRFConfig()
        self._session = session

    def issue_token(self, request: Any) -> str:
        cfg = self._config
        session = self._session(request)
        token = session.get(cfg.session_key)
        if not token:
            token = secrets.token_hex(cfg.token_length)
            session[cfg.session_key] = token
        return token
