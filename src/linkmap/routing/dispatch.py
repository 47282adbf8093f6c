"""Request dispatch — turn a request path into a controller and action.

Combines the matcher with the action rules a request handler needs:

1. a path parameter named ``action`` (e.g. ``"item/{action:edit,delete}"``)
2. else a non-blank ``action`` query parameter
3. else the matched link's declared default action
4. else ``""``
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from linkmap.routing.matcher import match_path
from linkmap.routing.registry import Registry


@dataclass(frozen=True, slots=True)
class Resolution:
    """Where a request should go.

    ``params`` holds the values extracted from the path. They take
    precedence over same-named request parameters.
    """

    controller: type
    action: str
    pattern: str
    params: dict[str, str] = field(default_factory=dict)
    skip_interceptors: frozenset[str] = field(default_factory=frozenset)


def resolve_request(
    registry: Registry,
    path: str,
    query: Mapping[str, str] | None = None,
    *,
    action_param: str = "action",
) -> Resolution | None:
    """Resolve a request path. Returns ``None`` when no link matches."""
    matched = match_path(registry, path)
    if matched is None:
        return None

    candidates = (
        matched.params.get(action_param),
        query.get(action_param) if query is not None else None,
        matched.action,
    )
    action = next((c.strip() for c in candidates if c and c.strip()), "")

    return Resolution(
        controller=matched.controller,
        action=action,
        pattern=matched.pattern,
        params=dict(matched.params),
        skip_interceptors=matched.skip_interceptors,
    )
