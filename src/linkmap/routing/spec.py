"""Link declarations attached to controller classes.

A controller declares one or more ``LinkSpec`` values with the ``@link``
decorator. Stacked decorators keep top-to-bottom order::

    @link("user/{login};profile", name="user", action="view")
    @link("u/{login}")
    class UserPage: ...

Declarations are plain class attributes, so a subclass without its own
``@link`` sees its nearest decorated ancestor's declarations.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

_SPECS_ATTR = "__link_specs__"

T = TypeVar("T", bound=type)


@dataclass(frozen=True, slots=True)
class LinkSpec:
    """A frozen link declaration.

    ``patterns`` are the ``;``-separated alternatives of one declaration.
    ``name`` is the link name used to pick between declarations when
    generating; when ``None`` the controller's logical name stands in.
    ``action`` is the default action for requests matched through this
    declaration. ``skip_interceptors`` lists request interceptors that
    should not run for those requests.
    """

    patterns: tuple[str, ...]
    name: str | None = None
    action: str = ""
    skip_interceptors: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def parse(
        cls,
        value: str,
        *,
        name: str | None = None,
        action: str = "",
        skip_interceptors: Iterable[str] = (),
    ) -> LinkSpec:
        """Build a spec from a ``;``-separated pattern string.

        Alternatives are kept verbatim (validation happens at registration),
        so ``"a;;b"`` carries an empty alternative that the registry rejects.
        """
        return cls(
            patterns=tuple(value.split(";")),
            name=name or None,
            action=action or "",
            skip_interceptors=frozenset(skip_interceptors),
        )


def link(
    value: str,
    *,
    name: str | None = None,
    action: str = "",
    skip_interceptors: Iterable[str] = (),
) -> Callable[[T], T]:
    """Declare a link on a controller class via decorator."""
    spec = LinkSpec.parse(value, name=name, action=action, skip_interceptors=skip_interceptors)

    def decorator(cls: T) -> T:
        # Only extend the class's own declarations, never an inherited tuple.
        own: tuple[LinkSpec, ...] = cls.__dict__.get(_SPECS_ATTR, ())
        setattr(cls, _SPECS_ATTR, (spec, *own))
        return cls

    return decorator


def declared_specs(controller: Any) -> tuple[LinkSpec, ...]:
    """Return the specs visible on *controller*, inherited ones included."""
    return tuple(getattr(controller, _SPECS_ATTR, ()))
