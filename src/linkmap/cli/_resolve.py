"""Locate an application's ``Links`` table from a ``"module:attr"`` string."""

import importlib
from typing import Any

from linkmap.links import Links

DEFAULT_ATTR = "links"


def resolve_links(import_string: str) -> Links:
    """Import *import_string* and return the ``Links`` it names.

    ``"myapp"`` is shorthand for ``"myapp:links"``. The attribute may also
    be a zero-argument factory that builds the table.

    Raises:
        ModuleNotFoundError: The module part can't be imported.
        AttributeError: The module has no such attribute.
        TypeError: The attribute is neither a ``Links`` nor a factory
            returning one, or the factory itself failed.
    """
    module_name, _, attr = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attr or DEFAULT_ATTR)

    if not isinstance(target, Links) and callable(target):
        target = _call_factory(target, import_string)

    if isinstance(target, Links):
        return target

    msg = f"{import_string!r} resolved to {type(target).__name__}, not a linkmap.Links instance"
    raise TypeError(msg)


def _call_factory(factory: Any, import_string: str) -> Any:
    try:
        return factory()
    except Exception as exc:
        msg = f"Factory function {import_string!r} raised an error: {exc}"
        raise TypeError(msg) from exc
