"""folio exception hierarchy.

Shared across the discoverer, bundle builder and render pipeline so every
module raises and catches the same types.
"""

from pathlib import Path


class FolioError(Exception):
    """Base for all folio-specific errors."""


class ConfigurationError(FolioError):
    """Raised when a render option has an invalid value.

    Typically raised by ``configure()`` at startup.
    """


# -- Build errors --


class BuildError(FolioError):
    """Building the bundle cache failed. Aborts the whole build."""


class DiscoveryError(BuildError):
    """Walking a template root failed.

    Raised when the root is missing, is not a directory, or a directory
    listing fails part way. No partial file list is ever returned.
    """

    def __init__(self, root: str | Path, detail: str = "") -> None:
        self.root = Path(root)
        self.detail = detail
        message = f"Cannot discover templates under {self.root}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CompileError(BuildError):
    """A page bundle failed to compile.

    ``page`` is the bundle name being built, ``path`` the file that could
    not be read or compiled (which may be a fragment rather than the page).
    """

    def __init__(self, page: str, path: str | Path | None = None, detail: str = "") -> None:
        self.page = page
        self.path = Path(path) if path is not None else None
        self.detail = detail
        message = f"Cannot compile bundle {page!r}"
        if self.path is not None:
            message = f"{message} ({self.path})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# -- Render errors --


class RenderError(FolioError):
    """A single render call failed.

    The cache and other in-flight calls are unaffected, and nothing was
    written to the output sink.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"{name}: {detail}" if detail else name)


class BundleNotFoundError(RenderError, LookupError):
    """The requested bundle name is not in the resolved cache."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "bundle not found")


class ExecutionError(RenderError):
    """The bundle raised while rendering the view data."""


class SinkError(RenderError, OSError):
    """Writing the rendered output to the sink failed."""
