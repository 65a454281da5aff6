"""folio CLI — build-time checks for template trees.

Entry point registered as ``folio`` in ``pyproject.toml``::

    [project.scripts]
    folio = "folio.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``folio`` command."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="folio — compile page templates into render-ready bundles.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- folio check ------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Build every bundle and report discovery or compile errors"
    )
    check_parser.add_argument(
        "--pages",
        default="templates/pages",
        help="Pages root (default: templates/pages)",
    )
    check_parser.add_argument(
        "--fragments",
        default="templates",
        help="Fragments root (default: templates)",
    )
    check_parser.add_argument(
        "--extension",
        default=".html",
        help="Markup file extension (default: .html)",
    )
    check_parser.add_argument(
        "--unique-names",
        action="store_true",
        help="Fail when two pages share a base name",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from folio.cli._check import run_check

        run_check(args)
