"""Kida template integration — the ``link`` global.

Makes link generation available inside templates::

    {{ link("UserPage", id=user.id) }}
    → /user/42

    {{ link("UserPage", id=user.id, value=user.name) }}
    → <a href="/user/42">Ada</a>

    {{ link("SectionsPage", link_name="by-name", section="news") }}

Requires kida (``pip install linkmap[templates]``).
"""

from __future__ import annotations

import html
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from linkmap.errors import TemplatesNotInstalledError
from linkmap.links import Links

if TYPE_CHECKING:
    from kida import Environment


def link_global(links: Links) -> Callable[..., Any]:
    """Build the ``link`` template global bound to *links*.

    ``value`` turns the result into an ``<a>`` element whose text is
    *value*; both the URL and the text are HTML-escaped. Raises
    ``NoSuchLink`` when the link can't be generated, which fails the
    render like any other template error.
    """
    markup = _markup_class()

    def link(
        name: str,
        link_name: str | None = None,
        value: Any = None,
        **params: Any,
    ) -> Any:
        url = links.link(name, params, link_name=link_name)
        if value is None:
            return url
        return markup(
            f'<a href="{html.escape(url, quote=True)}">{html.escape(str(value))}</a>'
        )

    return link


def install(env: Environment, links: Links, name: str = "link") -> Environment:
    """Register the ``link`` global on a kida Environment and return it."""
    env.add_global(name, link_global(links))
    return env


def _markup_class() -> type:
    """Return kida's Markup type, raising a clear error if kida is missing."""
    try:
        from kida.template import Markup
    except ImportError:
        msg = (
            "linkmap.templating requires 'kida' for template integration. "
            "Install with: pip install linkmap[templates]"
        )
        raise TemplatesNotInstalledError(msg) from None
    return Markup
