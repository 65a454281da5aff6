"""``folio check`` — build the bundle cache once and list what it holds.

Exits with code 1 if discovery or compilation fails.
"""

import argparse
import sys

from folio.config import (
    configure,
    with_extension,
    with_fragments_root,
    with_pages_root,
    with_unique_names,
)
from folio.errors import BuildError, ConfigurationError
from folio.templating.bundle import build_cache


def run_check(args: argparse.Namespace) -> None:
    """Compile every page under ``args.pages`` with ``args.fragments``.

    Prints one line per bundle: its name and the number of sources it was
    compiled from.
    """
    try:
        config = configure(
            with_pages_root(args.pages),
            with_fragments_root(args.fragments),
            with_extension(args.extension),
            with_unique_names(args.unique_names),
        )
        cache = build_cache(config)
    except (BuildError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for name in sorted(cache):
        bundle = cache[name]
        print(f"{name}  ({len(bundle.sources)} sources, {bundle.page})")
    print(f"{len(cache)} bundle(s) OK")
