"""Linkmap exception hierarchy.

Shared across the registry, matcher, generator and interceptor chain so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class LinkmapError(Exception):
    """Base for all linkmap-specific errors."""


class ConfigurationError(LinkmapError):
    """Raised when link declarations are invalid.

    Malformed patterns, duplicate pattern texts and controller name
    collisions all surface here, during registration at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(LinkmapError):
    """An error that maps directly to an HTTP status code.

    Lets a web layer turn a failed link lookup into a response without
    knowing about the routing internals.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — nothing is registered for the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class NoSuchLink(NotFound):  # noqa: N818
    """No registered pattern can render the requested link.

    Recoverable: callers typically present it as a 404 or fall back
    to another link.
    """


class InterceptorError(LinkmapError, ValueError):
    """Invalid interceptor registration (empty or duplicate name)."""


class TemplatesNotInstalledError(LinkmapError):
    """Raised when kida is not installed."""
