"""Render pipeline — look up a bundle, inject defaults, execute, flush.

Each call moves through resolve → execute → flush. Any failure ends the
call with an exception and nothing written to the sink: the bundle renders
to a complete string first, and the sink only ever sees that string in a
single ``write()``.

With the cache enabled, every bundle is built when the ``Renderer`` is
constructed and the read-only mapping is shared by all render calls. With
the cache disabled, each call builds its own bundles and drops them
afterwards, so template edits show up on the next request.
"""

from __future__ import annotations

import logging
from typing import Any

from folio.config import RenderConfig
from folio.errors import BundleNotFoundError, BuildError, ExecutionError, SinkError
from folio.protocols import TokenSource, Writable
from folio.templating.bundle import Bundle, BundleCache, build_cache
from folio.view import ViewData

logger = logging.getLogger("folio.render")


class Renderer:
    """Serve bundles for one configuration.

    Usage::

        renderer = Renderer(configure(with_cache()), SessionTokenSource())

        def handler(request, response):
            view = ViewData(data={"title": "Home"}, session_data=request.session)
            renderer.render(response, request, "home.html", view)

    Raises at construction (cache enabled) or per call (cache disabled):
        DiscoveryError, CompileError: the bundles could not be built.
    """

    __slots__ = ("_cache", "_config", "_tokens")

    def __init__(self, config: RenderConfig, tokens: TokenSource) -> None:
        self._config = config
        self._tokens = tokens
        self._cache: BundleCache | None = None
        if config.cache_enabled:
            # Fully built before the renderer is visible to any request.
            self._cache = build_cache(config)

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    @property
    def bundles(self) -> BundleCache:
        """The resolved bundle mapping (freshly built when uncached)."""
        return self._resolve()

    def _resolve(self) -> BundleCache:
        if self._cache is not None:
            return self._cache
        try:
            return build_cache(self._config)
        except BuildError:
            logger.error("error building bundles", exc_info=True)
            raise

    def _lookup(self, name: str) -> Bundle:
        bundles = self._resolve()
        bundle = bundles.get(name)
        if bundle is None:
            logger.debug("bundle not found: %s", name)
            raise BundleNotFoundError(name)
        return bundle

    def render_to_string(self, request: Any, name: str, view: ViewData) -> str:
        """Render bundle *name* and return the output instead of writing it.

        Sets ``view.csrf_token`` from the token source, as ``render()`` does.
        """
        bundle = self._lookup(name)
        view.csrf_token = self._tokens.issue_token(request)
        try:
            return bundle.execute(view.as_context())
        except Exception as exc:
            logger.error("error executing bundle %s", name, exc_info=True)
            raise ExecutionError(name, str(exc)) from exc

    def render(self, sink: Writable, request: Any, name: str, view: ViewData) -> None:
        """Render bundle *name* with *view* and write the bytes to *sink*.

        Raises:
            BundleNotFoundError: *name* is not a known bundle.
            ExecutionError: The template raised while rendering.
            SinkError: The sink rejected the write. Not retried.
        """
        output = self.render_to_string(request, name, view)
        try:
            payload = output.encode(self._config.encoding)
        except UnicodeEncodeError as exc:
            raise ExecutionError(name, str(exc)) from exc
        try:
            sink.write(payload)
        except (OSError, ValueError) as exc:
            # Closed files and buffers raise ValueError.
            logger.error("error writing bundle %s to sink", name, exc_info=True)
            raise SinkError(name, str(exc)) from exc
