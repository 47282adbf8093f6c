"""Link registry — the source of truth for controllers and their patterns.

Registration is rare (once per controller at startup) and serialized by a
single lock. Each successful registration publishes a new immutable
snapshot with one reference swap, so readers never lock and never see a
half-registered controller.

Free-threading safety:
    - LinkEntry, ParsedPattern and the snapshot are frozen (immutable)
    - register() builds the next snapshot under ``_lock`` and swaps it in
    - Readers grab ``_snapshot`` once and iterate that object only
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from linkmap.errors import ConfigurationError
from linkmap.routing.pattern import ParsedPattern, parse_pattern
from linkmap.routing.spec import LinkSpec, declared_specs

logger = logging.getLogger("linkmap.registry")


@dataclass(frozen=True, slots=True)
class LinkEntry:
    """One registered pattern alternative and the declaration it came from."""

    text: str
    pattern: ParsedPattern
    spec: LinkSpec
    link_name: str


@dataclass(frozen=True, slots=True)
class _Snapshot:
    entries: Mapping[type, tuple[LinkEntry, ...]]
    controllers: Mapping[str, type]
    names: Mapping[type, str]
    owners: Mapping[str, type]
    parsed: Mapping[str, ParsedPattern]


_EMPTY = _Snapshot(
    entries=MappingProxyType({}),
    controllers=MappingProxyType({}),
    names=MappingProxyType({}),
    owners=MappingProxyType({}),
    parsed=MappingProxyType({}),
)


class Registry:
    """Controller → pattern registry.

    Usage::

        registry = Registry()
        registry.register(UserPage, LinkSpec.parse("user;user/{id}"))
        registry.entries_for(UserPage)
    """

    __slots__ = ("_lock", "_snapshot")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: _Snapshot = _EMPTY

    def register(
        self,
        controller: type,
        *specs: LinkSpec,
        name: str | None = None,
        parent: type | None = None,
    ) -> tuple[LinkEntry, ...]:
        """Register *controller* and its link patterns.

        Specs come from *specs* when given, else from *parent*'s ``@link``
        declarations, else from the controller's own (or nearest decorated
        ancestor's) declarations. The logical name defaults to the class name.

        All-or-nothing: any invalid pattern, duplicate pattern text or name
        collision raises ``ConfigurationError`` and nothing is committed.
        Returns every entry registered for the controller so far.
        """
        if not isinstance(controller, type):
            msg = f"Controller must be a class, got {type(controller).__name__}."
            raise TypeError(msg)

        if not specs:
            specs = declared_specs(parent if parent is not None else controller)
        if not specs:
            msg = f"Can't find link for controller {controller.__qualname__}."
            raise ConfigurationError(msg)

        logical = name or controller.__name__

        with self._lock:
            snap = self._snapshot
            self._check_name(snap, controller, logical)

            accepted: list[LinkEntry] = []
            seen: set[str] = set()
            for spec in specs:
                for text in spec.patterns:
                    pattern = snap.parsed.get(text) or parse_pattern(text)
                    owner = snap.owners.get(text)
                    if owner is not None or text in seen:
                        owner_name = (owner or controller).__qualname__
                        msg = (
                            f"Link pattern {text!r} of {controller.__qualname__} "
                            f"is already registered for {owner_name}."
                        )
                        raise ConfigurationError(msg)
                    seen.add(text)
                    accepted.append(
                        LinkEntry(
                            text=text,
                            pattern=pattern,
                            spec=spec,
                            link_name=spec.name or logical,
                        )
                    )

            committed = snap.entries.get(controller, ()) + tuple(accepted)
            self._snapshot = _Snapshot(
                entries=MappingProxyType({**snap.entries, controller: committed}),
                controllers=MappingProxyType({**snap.controllers, logical: controller}),
                names=MappingProxyType({**snap.names, controller: logical}),
                owners=MappingProxyType(
                    {**snap.owners, **{entry.text: controller for entry in accepted}}
                ),
                parsed=MappingProxyType(
                    {**snap.parsed, **{entry.text: entry.pattern for entry in accepted}}
                ),
            )

        logger.debug(
            "Registered %s as %r: %s",
            controller.__qualname__,
            logical,
            ", ".join(entry.text for entry in accepted),
        )
        return committed

    @staticmethod
    def _check_name(snap: _Snapshot, controller: type, logical: str) -> None:
        bound = snap.controllers.get(logical)
        if bound is not None and bound is not controller:
            msg = (
                f"Can't register {controller.__qualname__}: name {logical!r} "
                f"is already used by {bound.__qualname__}."
            )
            raise ConfigurationError(msg)
        current = snap.names.get(controller)
        if current is not None and current != logical:
            msg = (
                f"Can't register {controller.__qualname__} as {logical!r}: "
                f"it is already registered as {current!r}."
            )
            raise ConfigurationError(msg)

    # -- Read side (lock-free) --

    def resolve(self, target: type | str) -> type | None:
        """Return the controller for a class or logical name, if registered."""
        snap = self._snapshot
        if isinstance(target, str):
            return snap.controllers.get(target)
        return target if target in snap.entries else None

    def controller_for(self, name: str) -> type | None:
        """Look up a controller by logical name. Returns ``None`` if unknown."""
        return self._snapshot.controllers.get(name)

    def name_of(self, controller: type) -> str | None:
        """Return the logical name of a registered controller."""
        return self._snapshot.names.get(controller)

    def entries_for(self, controller: type) -> tuple[LinkEntry, ...]:
        """Return the controller's entries in declaration order."""
        return self._snapshot.entries.get(controller, ())

    def parsed(self, text: str) -> ParsedPattern | None:
        """Return the parsed form of a registered pattern text."""
        return self._snapshot.parsed.get(text)

    def controllers(self) -> tuple[type, ...]:
        """Registered controllers in registration order."""
        return tuple(self._snapshot.entries)

    def entries(self) -> Iterator[tuple[type, LinkEntry]]:
        """Iterate ``(controller, entry)`` pairs over one consistent snapshot."""
        snap = self._snapshot
        for controller, entries in snap.entries.items():
            for entry in entries:
                yield controller, entry

    def __contains__(self, target: Any) -> bool:
        if isinstance(target, (str, type)):
            return self.resolve(target) is not None
        return False

    def __len__(self) -> int:
        return len(self._snapshot.entries)
