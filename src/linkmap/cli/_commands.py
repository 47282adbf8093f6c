"""``linkmap routes`` / ``match`` / ``link`` subcommands."""

import argparse
import sys

from linkmap.cli._resolve import resolve_links
from linkmap.errors import NoSuchLink
from linkmap.links import Links


def _load(import_string: str) -> Links:
    try:
        return resolve_links(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, PATTERN and CONTROLLER for every pattern."""
    links = _load(args.links)
    registry = links.registry

    rows: list[tuple[str, str, str]] = []
    for controller, entry in registry.entries():
        controller_name = f"{controller.__module__}.{controller.__qualname__}"
        rows.append((entry.link_name, entry.text, controller_name))

    if not rows:
        print("No links registered.")
        return

    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_name}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("NAME", "PATTERN", "CONTROLLER"))
    sep_len = max_name + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))


def run_match(args: argparse.Namespace) -> None:
    """Print the controller, pattern and parameters matched by a path."""
    links = _load(args.links)
    resolution = links.route(args.path)
    if resolution is None:
        print(f"No match for {args.path!r}", file=sys.stderr)
        raise SystemExit(1)

    controller = resolution.controller
    print(f"controller: {controller.__module__}.{controller.__qualname__}")
    print(f"pattern:    {resolution.pattern}")
    print(f"action:     {resolution.action or '-'}")
    for key, value in resolution.params.items():
        print(f"param:      {key}={value}")


def run_link(args: argparse.Namespace) -> None:
    """Print the link generated for a controller name and ``key=value`` pairs."""
    links = _load(args.links)

    params: dict[str, list[str]] = {}
    for pair in args.params:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: expected key=value, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        params.setdefault(key, []).append(value)

    try:
        url = links.link(args.target, params, link_name=args.link_name)
    except NoSuchLink as exc:
        print(f"Error: {exc.detail}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(url)
