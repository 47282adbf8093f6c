"""Linkmap — bidirectional link patterns for web controllers.

Declare links on controller classes, resolve request paths to controllers,
and generate canonical links back from controller + parameters.

Basic usage::

    from linkmap import Links

    links = Links()

    @links.page("user;user/{id}")
    class UserPage: ...

    links.match("/user/42").params     # {"id": "42"}
    links.link(UserPage, id=42)        # "/user/42"
    links.link(UserPage)               # "/user"

Template integration (``pip install linkmap[templates]``)::

    from linkmap.templating import install
    install(kida_env, links)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "InterceptorError",
    "LinkConfig",
    "LinkMatch",
    "LinkResult",
    "LinkSpec",
    "LinkmapError",
    "Links",
    "NoSuchLink",
    "NotFound",
    "Registry",
    "Resolution",
    "link",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import linkmap`` fast while providing a clean top-level API.
    """
    if name == "Links":
        from linkmap.links import Links

        return Links

    if name == "LinkConfig":
        from linkmap.config import LinkConfig

        return LinkConfig

    if name == "LinkResult":
        from linkmap.result import LinkResult

        return LinkResult

    if name in ("LinkSpec", "link"):
        from linkmap.routing import spec as _spec

        return getattr(_spec, name)

    if name == "Registry":
        from linkmap.routing.registry import Registry

        return Registry

    if name == "LinkMatch":
        from linkmap.routing.matcher import LinkMatch

        return LinkMatch

    if name == "Resolution":
        from linkmap.routing.dispatch import Resolution

        return Resolution

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InterceptorError",
        "LinkmapError",
        "NoSuchLink",
        "NotFound",
    ):
        from linkmap import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
