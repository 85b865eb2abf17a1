"""routeguard CLI — duplicate route detection over extracted events.

Entry point registered as ``routeguard`` in ``pyproject.toml``::

    [project.scripts]
    routeguard = "routeguard.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routeguard`` command."""
    parser = argparse.ArgumentParser(
        prog="routeguard",
        description="routeguard — detect duplicate and conflicting HTTP route registrations.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routeguard check --------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Check an event document for route conflicts")
    check_parser.add_argument(
        "events",
        help="Path to a JSON event document produced by an extractor",
    )
    check_parser.add_argument(
        "--level",
        type=int,
        choices=(0, 1, 2),
        default=None,
        help="Normalization level (0=raw, 1=ignore param names, 2=strict)",
    )
    check_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum router nesting depth (1-10)",
    )
    check_parser.add_argument(
        "--severity",
        choices=("error", "warn"),
        default=None,
        help="Severity of duplicate routes",
    )
    check_parser.add_argument(
        "--no-warn-static",
        action="store_true",
        help="Only report duplicates, not static/dynamic overlaps",
    )
    check_parser.add_argument(
        "--preserve-constraints",
        action="store_true",
        help="Keep regex constraints apart when normalizing",
    )
    check_parser.add_argument(
        "--global-prefix",
        default=None,
        help="Prefix joined in front of every route (e.g. /api)",
    )
    check_parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every event the engine processes",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from routeguard.cli._check import run_check

        run_check(args)
