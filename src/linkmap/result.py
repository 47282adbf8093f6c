"""Link result — immutable container for a generated link or the reason it failed."""

from dataclasses import dataclass

from linkmap.errors import NoSuchLink


@dataclass(frozen=True, slots=True)
class LinkResult:
    """The outcome of generating a link without raising.

    The result is falsy when no link could be generated, so you can write::

        result = links.try_link(UserPage, id=user_id)
        if not result:
            return fallback
        redirect(result.url)

    ``error`` holds the ``NoSuchLink`` that ``links.link()`` would have
    raised. Configuration errors are never captured here.
    """

    url: str | None = None
    error: NoSuchLink | None = None

    @property
    def ok(self) -> bool:
        """True if a link was generated."""
        return self.error is None and self.url is not None

    def unwrap(self) -> str:
        """Return the link, raising the captured ``NoSuchLink`` on failure."""
        if self.error is not None:
            raise self.error
        if self.url is None:
            msg = "Empty link result"
            raise NoSuchLink(msg)
        return self.url

    def __bool__(self) -> bool:
        """Falsy on failure — enables ``if not result:`` pattern."""
        return self.ok
