"""folio — compiled page bundles for server-rendered HTML.

Discovers page and fragment templates, compiles each page together with
every shared fragment into one kida bundle, and renders bundles per request
with session, feedback, form and anti-forgery data injected.

Basic usage::

    from folio import Renderer, ViewData, configure, with_cache
    from folio.security import SessionTokenSource

    renderer = Renderer(configure(with_cache()), SessionTokenSource())
    renderer.render(response, request, "home.html", ViewData(data={"title": "Home"}))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "Bundle",
    "BundleNotFoundError",
    "CompileError",
    "ConfigurationError",
    "DiscoveryError",
    "ExecutionError",
    "FolioError",
    "FormState",
    "RenderConfig",
    "RenderError",
    "Renderer",
    "SinkError",
    "TokenSource",
    "ViewData",
    "Writable",
    "build_cache",
    "configure",
    "with_cache",
    "with_fragments_root",
    "with_functions",
    "with_pages_root",
    "with_settings",
]

_ERRORS = frozenset(
    {
        "BundleNotFoundError",
        "CompileError",
        "ConfigurationError",
        "DiscoveryError",
        "ExecutionError",
        "FolioError",
        "RenderError",
        "SinkError",
    }
)

_CONFIG = frozenset(
    {
        "RenderConfig",
        "configure",
        "with_cache",
        "with_fragments_root",
        "with_functions",
        "with_pages_root",
        "with_settings",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import folio`` from importing kida until it is needed.
    """
    if name in _ERRORS:
        from folio import errors

        return getattr(errors, name)

    if name in _CONFIG:
        from folio import config

        return getattr(config, name)

    if name == "Renderer":
        from folio.render import Renderer

        return Renderer

    if name in ("Bundle", "build_cache"):
        from folio.templating import bundle

        return getattr(bundle, name)

    if name in ("ViewData", "FormState"):
        from folio import view

        return getattr(view, name)

    if name in ("TokenSource", "Writable"):
        from folio import protocols

        return getattr(protocols, name)

    msg = f"module 'folio' has no attribute {name!r}"
    raise AttributeError(msg)
