"""Reverse resolution — controller and parameters to a link.

Given the caller's parameters, the generator picks the controller's
pattern that moves the most parameters into the path, renders it, and
appends whatever is left over as a query string::

    # UserPage: "user;user/{id}"
    generate_link(registry, UserPage, {"id": 7})             -> "/user/7"
    generate_link(registry, UserPage, {})                    -> "/user"
    generate_link(registry, UserPage, {"id": 7, "tab": "x"}) -> "/user/7?tab=x"
"""

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

from linkmap.config import LinkConfig
from linkmap.errors import NoSuchLink
from linkmap.routing.interceptors import InterceptorChain
from linkmap.routing.registry import LinkEntry, Registry


def normalize_params(params: Mapping[str, Any] | None) -> dict[str, list[str]]:
    """Convert caller parameters to ``{name: [value, ...]}``.

    Drops ``None``, empty collections and values that stringify to ``""``.
    Strings and bytes are scalars; any other iterable is a list of values.
    """
    normalized: dict[str, list[str]] = {}
    for key, value in (params or {}).items():
        values = _to_strings(value)
        if values:
            normalized[str(key)] = values
    return normalized


def _to_strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        text = _stringify(value)
        return [text] if text else []
    return [text for item in value if item is not None and (text := _stringify(item))]


def _stringify(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def select_entry(
    entries: Iterable[LinkEntry],
    params: Mapping[str, list[str]],
    link_name: str | None = None,
) -> LinkEntry | None:
    """Pick the entry that satisfies the most parameter segments.

    An entry is a candidate only if every one of its parameter segments is
    satisfied: the parameter is present and its first value is allowed.
    Ties go to the entry declared first.
    """
    best: LinkEntry | None = None
    best_count = -1
    for entry in entries:
        if link_name and entry.link_name != link_name:
            continue
        count = 0
        for segment in entry.pattern.params:
            values = params.get(segment.value)
            if not values or not segment.accepts(values[0]):
                break
            count += 1
        else:
            if count > best_count:
                best, best_count = entry, count
    return best


def render_entry(
    entry: LinkEntry,
    params: Mapping[str, list[str]],
    config: LinkConfig,
) -> tuple[str, set[str]]:
    """Render the entry's path. Returns the path and the parameter names it used."""
    parts = [config.context_path]
    used: set[str] = set()
    for segment in entry.pattern.segments:
        if segment.is_param:
            used.add(segment.value)
            parts.append("/" + _encode(params[segment.value][0], config))
        else:
            parts.append("/" + segment.value)
    return "".join(parts), used


def overflow_query(
    params: Mapping[str, list[str]],
    used: set[str],
    config: LinkConfig,
) -> str:
    """Build ``?k=v&...`` from values the path did not consume.

    A parameter used in the path contributes its values after the first;
    an unused parameter contributes all of them.
    """
    pairs: list[str] = []
    for key, values in params.items():
        remaining = values[1:] if key in used else values
        for value in remaining:
            pairs.append(f"{_encode(key, config)}={_encode(value, config)}")
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def _encode(value: str, config: LinkConfig) -> str:
    if config.quote_values:
        return quote(value, safe="")
    return value


def generate_link(
    registry: Registry,
    target: type | str,
    params: Mapping[str, Any] | None = None,
    *,
    link_name: str | None = None,
    config: LinkConfig | None = None,
    interceptors: InterceptorChain | None = None,
) -> str:
    """Generate a link for a controller class or logical name.

    Raises ``NoSuchLink`` if the controller is unknown or none of its
    patterns (restricted to *link_name*, when given) can be satisfied.
    """
    config = config or LinkConfig()
    label = target if isinstance(target, str) else target.__qualname__

    controller = registry.resolve(target)
    if controller is None:
        msg = f"Can't find link for {label}."
        raise NoSuchLink(msg)

    normalized = normalize_params(params)
    entry = select_entry(registry.entries_for(controller), normalized, link_name)
    if entry is None:
        if link_name:
            msg = f"Can't find link named {link_name!r} for {label}."
        else:
            msg = f"Can't find link for {label}."
        raise NoSuchLink(msg)

    path, used = render_entry(entry, normalized, config)
    result = path + overflow_query(normalized, used, config)

    if interceptors is not None:
        caller_params = dict(params or {})
        result = interceptors.postprocess(result, controller, link_name, caller_params)
    return result
