"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from .man_db import ManDb, ManDbError
from .tui import run_tui

_VERSION = "0.2.0"


def _section(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid section: {text!r}") from None
    if not 0 <= value <= 255:
        raise argparse.ArgumentTypeError(f"section out of range: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Argument parser of the ``rtfm`` command."""
    parser = argparse.ArgumentParser(
        prog="rtfm",
        description="CLI for browsing man pages and tldr cheatsheets",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="help", help="Print help")
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {_VERSION}", help="Print version"
    )
    parser.add_argument(
        "-s",
        "--section",
        type=_section,
        default=1,
        help="Manual section to use (default: 1)",
    )
    commands = parser.add_subparsers(dest="command")
    getmans = commands.add_parser("getmans", help="List commands starting with prefix")
    getmans.add_argument("prefix")
    getman = commands.add_parser("getman", help="Show man page for command")
    getman.add_argument("name", metavar="command")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; returns the exit status."""
    args = build_parser().parse_args(argv)
    try:
        man_db = ManDb.load(args.section)
        if args.command == "getmans":
            for word in man_db.commands_starting_with(args.prefix):
                print(word)
        elif args.command == "getman":
            man_db.display_man_page(args.name)
        else:
            asyncio.run(run_tui(man_db))
    except ManDbError as exc:
        print(f"rtfm: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())