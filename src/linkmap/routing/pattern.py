"""Link pattern parsing.

A pattern is one alternative of a link declaration, a slash-separated
list of segments::

    "profile/{handle}"              -> [literal "profile", param "handle"]
    "action/{kind:purchase,sell}"   -> [literal "action", param "kind" in {purchase, sell}]

Patterns never start or end with ``/`` and have no wildcard segments.
"""

from dataclasses import dataclass

from linkmap.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a link pattern.

    Literal:     ``users``             (is_param=False, value="users")
    Param:       ``{id}``              (is_param=True, value="id")
    Restricted:  ``{kind:buy,sell}``   (is_param=True, value="kind",
                                        allowed=frozenset({"buy", "sell"}))
    """

    value: str
    is_param: bool = False
    allowed: frozenset[str] | None = None

    def accepts(self, token: str) -> bool:
        """Check whether a path token or parameter value fits this segment."""
        if not self.is_param:
            return token == self.value
        if not token:
            return False
        return self.allowed is None or token in self.allowed


@dataclass(frozen=True, slots=True)
class ParsedPattern:
    """An immutable, parsed link pattern."""

    text: str
    segments: tuple[Segment, ...]

    @property
    def params(self) -> tuple[Segment, ...]:
        """Parameter segments in path order."""
        return tuple(seg for seg in self.segments if seg.is_param)

    def __len__(self) -> int:
        return len(self.segments)


def parse_pattern(text: str) -> ParsedPattern:
    """Parse a pattern string into segments.

    Raises ``ConfigurationError`` for an empty pattern, a leading or
    trailing ``/``, an empty segment, or a malformed ``{...}`` section.

    Examples::

        parse_pattern("user/{id}")
        parse_pattern("action/{kind:purchase,sell}")
    """
    if not text:
        msg = "Link pattern must not be empty."
        raise ConfigurationError(msg)
    if text.startswith("/") or text.endswith("/"):
        msg = f"Link pattern {text!r} must not start or end with '/'."
        raise ConfigurationError(msg)

    segments: list[Segment] = []
    for part in text.split("/"):
        if not part:
            msg = f"Link pattern {text!r} contains an empty section."
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            segments.append(_parse_param(text, part[1:-1]))
        else:
            segments.append(Segment(value=part))
    return ParsedPattern(text=text, segments=tuple(segments))


def _parse_param(text: str, inner: str) -> Segment:
    pieces = inner.split(":")
    name = pieces[0]
    if len(pieces) == 1 and name:
        return Segment(value=name, is_param=True)
    if len(pieces) == 2 and name:
        allowed = frozenset(v for v in pieces[1].split(",") if v)
        if allowed:
            return Segment(value=name, is_param=True, allowed=allowed)

    msg = f"Invalid link section format {{{inner}}} in pattern {text!r}."
    raise ConfigurationError(msg)
