"""Linkmap CLI — inspect a link table from the command line.

Entry point registered as ``linkmap`` in ``pyproject.toml``::

    [project.scripts]
    linkmap = "linkmap.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``linkmap`` command."""
    parser = argparse.ArgumentParser(
        prog="linkmap",
        description="Linkmap — bidirectional link patterns for web controllers.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log registration details",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- linkmap routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered link patterns")
    routes_parser.add_argument("links", help="Import string (e.g. myapp:links)")

    # -- linkmap match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Resolve a request path")
    match_parser.add_argument("links", help="Import string (e.g. myapp:links)")
    match_parser.add_argument("path", help="Request path (e.g. /user/42?tab=posts)")

    # -- linkmap link -----------------------------------------------------
    link_parser = subparsers.add_parser("link", help="Generate a link")
    link_parser.add_argument("links", help="Import string (e.g. myapp:links)")
    link_parser.add_argument("target", help="Controller name (e.g. UserPage)")
    link_parser.add_argument("params", nargs="*", help="Parameters as key=value")
    link_parser.add_argument("--link-name", default=None, help="Only use links with this name")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from linkmap.cli._commands import run_link, run_match, run_routes

    if args.command == "routes":
        run_routes(args)
    elif args.command == "match":
        run_match(args)
    elif args.command == "link":
        run_link(args)
