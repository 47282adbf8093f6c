"""Link interceptors — post-processing applied to every generated link.

Interceptors run in registration order and may rewrite the link::

    def add_lang(link, controller, link_name, params):
        return f"/en{link}"

    chain.add("lang", add_lang)

Free-threading safety:
    - Many ``postprocess`` calls run in parallel, up to the permit ceiling.
      Callers beyond the ceiling block until a slot frees up.
    - ``add``/``remove`` wait for running calls to drain and hold off new
      ones, so no interceptor runs while the set is being changed.
    - The interceptor set is an immutable tuple replaced on change, so
      ``has``/``names`` read it without entering the gate.
"""

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeAlias

from linkmap.errors import InterceptorError

logger = logging.getLogger("linkmap.interceptors")

# (link, controller, link_name, params) -> rewritten link
Interceptor: TypeAlias = Callable[[str, type, str | None, Mapping[str, Any]], str]


class ReadWriteGate:
    """Bounded shared access with exclusive, writer-preferring access.

    ``shared()`` admits up to *limit* holders at once. ``exclusive()``
    waits until no shared holder remains; while a writer waits or holds
    the gate, new shared holders block.

    ``shared()`` is re-entrant per thread: a thread that already holds a
    shared slot re-enters without waiting, so an interceptor may generate
    links itself even while a writer is queued.
    """

    __slots__ = ("_cond", "_held", "_limit", "_readers", "_waiting_writers", "_writer")

    def __init__(self, limit: int) -> None:
        if limit < 1:
            msg = f"Gate limit must be positive, got {limit}"
            raise ValueError(msg)
        self._cond = threading.Condition(threading.Lock())
        self._limit = limit
        self._readers = 0
        self._waiting_writers = 0
        self._writer = False
        self._held = threading.local()

    @property
    def limit(self) -> int:
        return self._limit

    @contextmanager
    def shared(self) -> Iterator[None]:
        depth = getattr(self._held, "depth", 0)
        if depth:
            self._held.depth = depth + 1
            try:
                yield
            finally:
                self._held.depth = depth
            return

        with self._cond:
            while self._writer or self._waiting_writers or self._readers >= self._limit:
                self._cond.wait()
            self._readers += 1
        self._held.depth = 1
        try:
            yield
        finally:
            self._held.depth = 0
            with self._cond:
                self._readers -= 1
                self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InterceptorChain:
    """Ordered, named interceptors guarded by a ``ReadWriteGate``."""

    __slots__ = ("_gate", "_interceptors")

    def __init__(self, permits: int) -> None:
        self._gate = ReadWriteGate(permits)
        self._interceptors: tuple[tuple[str, Interceptor], ...] = ()

    def postprocess(
        self,
        link: str,
        controller: type,
        link_name: str | None,
        params: Mapping[str, Any],
    ) -> str:
        """Run every interceptor over *link* and return the result."""
        with self._gate.shared():
            for _name, interceptor in self._interceptors:
                link = interceptor(link, controller, link_name, params)
        return link

    def add(self, name: str, interceptor: Interceptor) -> None:
        """Append an interceptor. Names must be non-empty and unused."""
        _check_name(name)
        with self._gate.exclusive():
            if any(existing == name for existing, _ in self._interceptors):
                msg = f"Interceptor {name!r} is already registered."
                raise InterceptorError(msg)
            self._interceptors = (*self._interceptors, (name, interceptor))
        logger.debug("Added link interceptor %r", name)

    def remove(self, name: str) -> bool:
        """Remove an interceptor. Returns ``False`` if it wasn't registered."""
        _check_name(name)
        with self._gate.exclusive():
            remaining = tuple(item for item in self._interceptors if item[0] != name)
            removed = len(remaining) != len(self._interceptors)
            self._interceptors = remaining
        if removed:
            logger.debug("Removed link interceptor %r", name)
        return removed

    def has(self, name: str) -> bool:
        _check_name(name)
        return any(existing == name for existing, _ in self._interceptors)

    def names(self) -> tuple[str, ...]:
        """Interceptor names in the order they run."""
        return tuple(name for name, _ in self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)


def _check_name(name: str) -> None:
    if not name:
        msg = "Interceptor name must be a non-empty string."
        raise InterceptorError(msg)
