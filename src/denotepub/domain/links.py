"""Link rendering: internal ``denote:`` references to anchors.

The renderer is installed into the body renderer as a narrow hook
(:class:`LinkRenderer`), so neither side depends on the other's idea of
what a link is beyond :class:`Link`.

Example: ``[[denote:20240101T120000::section-2]]`` with style class
``internal-link`` renders as::

    <a href="denote:20240101T120000.html#section-2" class="internal-link">20240101T120000::section-2</a>
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from html import escape
from typing import Protocol

DENOTE_LINK_TYPE = "denote"
DENOTE_SCHEME = "denote"
QUERY_SEPARATOR = "::"

_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp")
_URL_TYPES = frozenset({"http", "https", "ftp", "mailto"})


@dataclass(frozen=True)
class Link:
    """A link as seen by the body renderer: a type tag and a raw path.

    ``Link("denote", "20240101T120000::section-2")`` or
    ``Link("https", "//example.com")``. Plain fuzzy or relative targets
    use ``type="fuzzy"`` / ``type="file"``.
    """

    type: str
    path: str

    @property
    def target(self) -> str:
        """The link target as written, type prefix included."""
        if self.type in ("fuzzy", ""):
            return self.path
        return f"{self.type}:{self.path}"


@dataclass(frozen=True)
class Reference:
    """A resolved internal reference."""

    identifier: str
    query: str | None = None


Resolver = Callable[[str], Reference]
FallbackRenderer = Callable[[Link, str | None], str]


class LinkRenderer(Protocol):
    """Hook the body renderer calls for every link it meets."""

    def __call__(self, link: Link, label: str | None) -> str: ...


def parse_reference(path: str) -> Reference:
    """Split ``ID::query`` into a :class:`Reference`. Empty queries are dropped."""
    identifier, _sep, query = path.partition(QUERY_SEPARATOR)
    return Reference(identifier=identifier.strip(), query=query.strip() or None)


def reference_label(reference: Reference, explicit: str | None = None) -> str:
    """Visible text: explicit label, else ``ID::query``, else the bare ID."""
    if explicit:
        return explicit
    if reference.query:
        return f"{reference.identifier}{QUERY_SEPARATOR}{reference.query}"
    return reference.identifier


def reference_href(reference: Reference) -> str:
    """Anchor destination: ``denote:ID.html`` plus ``#query`` when present."""
    href = f"{DENOTE_SCHEME}:{reference.identifier}.html"
    if reference.query:
        href += "#" + reference.query.lstrip("#")
    return href


def render_markdown_link(link: Link, label: str | None) -> str:
    """Generic Markdown rendering for links that are not internal references."""
    target = link.target
    if link.type == "file":
        target = link.path
        if not label and target.lower().endswith(_IMAGE_SUFFIXES):
            return f"![]({target})"
    if not label:
        if link.type in _URL_TYPES:
            return f"<{target}>"
        label = target
    return f"[{label}]({target})"


def render_link(
    link: Link,
    label: str | None,
    style_class: str,
    *,
    resolve: Resolver = parse_reference,
    fallback: FallbackRenderer = render_markdown_link,
) -> str:
    """Render *link* for the published Markdown body.

    Internal ``denote:`` links become an HTML anchor carrying
    *style_class*; every other link type is handed to *fallback*.

    Raises:
        UnresolvedReferenceError: Propagated from *resolve*.
    """
    if link.type != DENOTE_LINK_TYPE:
        return fallback(link, label)

    reference = resolve(link.path)
    text = reference_label(reference, label)
    return (
        f'<a href="{escape(reference_href(reference))}" class="{escape(style_class)}">'
        f"{escape(text, quote=False)}</a>"
    )


def make_link_renderer(
    style_class: str,
    *,
    resolve: Resolver = parse_reference,
    fallback: FallbackRenderer = render_markdown_link,
) -> LinkRenderer:
    """Bind configuration into a ``(link, label) -> str`` hook."""
    return partial(render_link, style_class=style_class, resolve=resolve, fallback=fallback)
