"""Filesystem discovery for template roots.

Walks a directory tree and collects every file with the markup extension.
The same walk serves both the fragments root and the pages root.

Order is deterministic: entries of each directory are visited in sorted
name order, files before subdirectories, depth-first. Bundle name
collisions are resolved by this order, so it must not depend on the
filesystem. Symlinked directories are skipped, so a link back up the
tree cannot repeat files.
"""

from __future__ import annotations

from pathlib import Path

from folio.errors import DiscoveryError


def find_markup_files(root: str | Path, extension: str = ".html") -> list[Path]:
    """Return every ``extension`` file under *root*, recursively.

    Args:
        root: Directory to walk.
        extension: File name ending to match, including the dot. A file
            named exactly ``.html`` matches ``".html"``.

    Raises:
        DiscoveryError: *root* is missing, is not a directory, or a
            directory under it cannot be listed. No partial list is
            returned.
    """
    base = Path(root)
    if not base.is_dir():
        raise DiscoveryError(base, "not a directory")

    files: list[Path] = []
    _walk_directory(base, base, extension=extension, files=files)
    return files


def _walk_directory(directory: Path, root: Path, *, extension: str, files: list[Path]) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise DiscoveryError(root, f"cannot list {directory}: {exc.strerror or exc}") from exc

    subdirs: list[Path] = []
    for item in entries:
        if item.is_dir():
            # Symlinked directories are not followed.
            if not item.is_symlink():
                subdirs.append(item)
        elif item.is_file() and item.name.endswith(extension):
            files.append(item)

    for subdir in subdirs:
        _walk_directory(subdir, root, extension=extension, files=files)
