"""Forward resolution — request path to controller and parameters.

Scans the registry in registration order and returns the first pattern
whose segments line up with the path. Pattern texts are globally unique,
so there is no "best match" here, unlike link generation.
"""

from dataclasses import dataclass

from linkmap.routing.pattern import ParsedPattern
from linkmap.routing.registry import Registry
from linkmap.routing.spec import LinkSpec


@dataclass(frozen=True, slots=True)
class LinkMatch:
    """Result of a successful path match."""

    controller: type
    pattern: str
    params: dict[str, str]
    spec: LinkSpec

    @property
    def action(self) -> str:
        """Default action declared by the matched link."""
        return self.spec.action

    @property
    def skip_interceptors(self) -> frozenset[str]:
        return self.spec.skip_interceptors


def split_path(path: str) -> list[str] | None:
    """Strip ``#fragment`` and ``?query`` and split into tokens.

    Returns ``None`` when the remainder is not an absolute path.
    """
    path = path.partition("#")[0].partition("?")[0]
    if not path.startswith("/"):
        return None
    tokens = path[1:].split("/")
    # Trailing slashes are ignored; interior empty sections are kept.
    while len(tokens) > 1 and not tokens[-1]:
        tokens.pop()
    return tokens


def match_tokens(pattern: ParsedPattern, tokens: list[str]) -> dict[str, str] | None:
    """Match path tokens against one pattern.

    Returns the bound parameters, or ``None`` if the pattern doesn't fit.
    """
    if len(pattern.segments) != len(tokens):
        return None
    params: dict[str, str] = {}
    for segment, token in zip(pattern.segments, tokens, strict=True):
        if not segment.accepts(token):
            return None
        if segment.is_param:
            params[segment.value] = token
    return params


def match_path(registry: Registry, path: str) -> LinkMatch | None:
    """Resolve *path* against every registered pattern.

    ``"/profile/mike?tab=posts#top"`` is matched as ``/profile/mike``.
    Returns ``None`` if nothing matches.
    """
    tokens = split_path(path)
    if tokens is None:
        return None

    for controller, entry in registry.entries():
        params = match_tokens(entry.pattern, tokens)
        if params is not None:
            return LinkMatch(
                controller=controller,
                pattern=entry.text,
                params=params,
                spec=entry.spec,
            )
    return None
