"""The Links object — one registry, its config and its interceptors.

Created once at application startup and passed to whatever needs to
match paths or build links.
"""

import functools
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from anyio import to_thread

from linkmap.config import LinkConfig
from linkmap.errors import NoSuchLink
from linkmap.result import LinkResult
from linkmap.routing.dispatch import Resolution, resolve_request
from linkmap.routing.generator import generate_link
from linkmap.routing.interceptors import Interceptor, InterceptorChain
from linkmap.routing.matcher import LinkMatch, match_path
from linkmap.routing.registry import LinkEntry, Registry
from linkmap.routing.spec import LinkSpec, link

T = TypeVar("T", bound=type)


class Links:
    """Application-wide link table.

    Usage::

        links = Links(LinkConfig(context_path="/app"))

        @links.page("user;user/{id}")
        class UserPage: ...

        links.link(UserPage, id=7)     # "/app/user/7"
        links.match("/user/7")         # LinkMatch(UserPage, "user/{id}", {"id": "7"}, ...)

    Thread safety:
        Registration is serialized inside the registry and expected at
        startup. Matching and generation are lock-free reads; generation
        additionally passes through the interceptor gate.
    """

    __slots__ = ("_interceptors", "_registry", "config")

    def __init__(
        self,
        config: LinkConfig | None = None,
        *,
        registry: Registry | None = None,
    ) -> None:
        self.config: LinkConfig = config or LinkConfig()
        self._registry = registry if registry is not None else Registry()
        self._interceptors = InterceptorChain(self.config.permits)

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def interceptors(self) -> InterceptorChain:
        return self._interceptors

    # -- Registration --

    def register(
        self,
        controller: type,
        *specs: LinkSpec,
        name: str | None = None,
        parent: type | None = None,
    ) -> tuple[LinkEntry, ...]:
        """Register a controller. See ``Registry.register``."""
        return self._registry.register(controller, *specs, name=name, parent=parent)

    def page(
        self,
        value: str,
        *,
        name: str | None = None,
        action: str = "",
        skip_interceptors: Iterable[str] = (),
        controller_name: str | None = None,
    ) -> Callable[[T], T]:
        """Declare a link and register the controller in one step.

        ``name`` names this link; ``controller_name`` overrides the
        controller's logical name (the class name by default). Further
        ``@link`` declarations below this decorator are registered too.
        """
        declare = link(value, name=name, action=action, skip_interceptors=skip_interceptors)

        def decorator(cls: T) -> T:
            declare(cls)
            self._registry.register(cls, name=controller_name)
            return cls

        return decorator

    # -- Matching --

    def match(self, path: str) -> LinkMatch | None:
        """Match a request path. Returns ``None`` if nothing matches."""
        return match_path(self._registry, path)

    def route(self, path: str, query: Mapping[str, str] | None = None) -> Resolution | None:
        """Resolve a request to controller, action and path parameters."""
        return resolve_request(
            self._registry,
            path,
            query,
            action_param=self.config.action_param,
        )

    # -- Generation --

    def link(
        self,
        target: type | str,
        params: Mapping[str, Any] | None = None,
        /,
        *,
        link_name: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Build a link to *target* (a controller class or logical name).

        Parameters come from *params* and keyword arguments (keywords win).
        Raises ``NoSuchLink`` if no registered pattern fits.
        """
        return generate_link(
            self._registry,
            target,
            _merge(params, kwargs),
            link_name=link_name,
            config=self.config,
            interceptors=self._interceptors,
        )

    def try_link(
        self,
        target: type | str,
        params: Mapping[str, Any] | None = None,
        /,
        *,
        link_name: str | None = None,
        **kwargs: Any,
    ) -> LinkResult:
        """Like ``link()``, but returns a falsy ``LinkResult`` instead of raising."""
        try:
            url = self.link(target, params, link_name=link_name, **kwargs)
        except NoSuchLink as exc:
            return LinkResult(error=exc)
        return LinkResult(url=url)

    async def alink(
        self,
        target: type | str,
        params: Mapping[str, Any] | None = None,
        /,
        *,
        link_name: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Async ``link()``. Runs in a worker thread so the event loop never
        blocks on the interceptor gate."""
        call = functools.partial(
            self.link, target, params, link_name=link_name, **kwargs
        )
        return await to_thread.run_sync(call)

    # -- Interceptors --

    def add_interceptor(self, name: str, interceptor: Interceptor) -> None:
        self._interceptors.add(name, interceptor)

    def remove_interceptor(self, name: str) -> bool:
        return self._interceptors.remove(name)

    def has_interceptor(self, name: str) -> bool:
        return self._interceptors.has(name)

    def interceptor(self, name: str | None = None) -> Callable[[Interceptor], Interceptor]:
        """Register a link interceptor via decorator."""

        def decorator(func: Interceptor) -> Interceptor:
            self._interceptors.add(name or func.__name__, func)
            return func

        return decorator


def _merge(params: Mapping[str, Any] | None, kwargs: dict[str, Any]) -> dict[str, Any]:
    if not params:
        return kwargs
    return {**params, **kwargs}
