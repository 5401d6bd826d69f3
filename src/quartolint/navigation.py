"""Navigation resolution for Quarto websites."""

from __future__ import annotations

from dataclasses import dataclass, field
import posixpath
import re
from typing import TYPE_CHECKING

from quartolint.log import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterator

    from quartolint.common_types import LinkKind, NavLocation
    from quartolint_config.site import NavItem, SidebarConfig, SiteConfig


logger = get_logger(__name__)

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass(frozen=True)
class NavEntry:
    """A link found somewhere in the site navigation."""

    href: str | None
    text: str | None
    trail: tuple[str, ...]
    location: NavLocation
    kind: LinkKind | None

    @property
    def page(self) -> str | None:
        """Project-relative page path for page links."""
        if self.kind != "page" or not self.href:
            return None
        return normalize_page_ref(self.href)

    @property
    def label(self) -> str:
        return " > ".join([*self.trail, self.text or self.href or "?"])


@dataclass
class NavNode:
    """Node of a displayable navigation tree."""

    title: str
    href: str | None = None
    children: list[NavNode] = field(default_factory=list)


def classify_href(href: str) -> LinkKind:
    """Classify a link target.

    >>> classify_href("https://aisi.gov.uk/")
    'external'
    >>> classify_href("tools.qmd")
    'page'
    """
    if href == "auto":
        return "auto"
    if href.startswith("#"):
        return "anchor"
    if href.startswith("//") or _SCHEME.match(href):
        return "external"
    return "page"


def normalize_page_ref(href: str) -> str:
    """Strip fragment, query and leading root markers from a page reference."""
    path = href.split("#", 1)[0].split("?", 1)[0]
    path = path.lstrip("/")
    if not path:
        return ""
    return posixpath.normpath(path)


def _walk(
    items: list[NavItem],
    trail: tuple[str, ...],
    location: NavLocation,
) -> Iterator[NavEntry]:
    for item in items:
        if item.href:
            yield NavEntry(item.href, item.title, trail, location, classify_href(item.href))
        if item.is_section or item.menu:
            title = item.title or item.href or ""
            yield from _walk(item.children, (*trail, title), location)


def iter_sidebar_entries(sidebar: SidebarConfig) -> Iterator[NavEntry]:
    """Yield entries of one sidebar, contents first, then tools."""
    root = (sidebar.title,) if sidebar.title else ()
    yield from _walk(sidebar.contents, root, "sidebar")
    yield from _walk(sidebar.tools, root, "sidebar-tools")


def iter_nav_entries(site: SiteConfig) -> Iterator[NavEntry]:
    """Yield all navigation entries of a site in display order."""
    website = site.website
    if website is None:
        return
    for sidebar in website.sidebar:
        yield from iter_sidebar_entries(sidebar)
    if website.navbar:
        yield from _walk(website.navbar.left, (), "navbar")
        yield from _walk(website.navbar.right, (), "navbar")
    if website.page_footer:
        for position, items in website.page_footer.parts().items():
            yield from _walk(items, (position,), "page-footer")


def nav_pages(site: SiteConfig) -> list[str]:
    """Page paths referenced by the navigation, duplicates preserved."""
    return [e.page for e in iter_nav_entries(site) if e.page]


def empty_sections(site: SiteConfig) -> list[NavEntry]:
    """Sidebar sections without any contents."""
    result: list[NavEntry] = []

    def walk(items: list[NavItem], trail: tuple[str, ...]):
        for item in items:
            if item.section is None:
                continue
            if not item.children:
                result.append(NavEntry(item.href, item.section, trail, "sidebar", None))
            walk(item.children, (*trail, item.section))

    for sidebar in site.sidebars:
        walk(sidebar.contents, (sidebar.title,) if sidebar.title else ())
    return result


def build_tree(site: SiteConfig) -> NavNode:
    """Build a navigation tree for display purposes."""
    title = (site.website.title if site.website else None) or "site"
    root = NavNode(title)

    def add(parent: NavNode, items: list[NavItem]):
        for item in items:
            node = NavNode(item.title or item.href or "?", item.href)
            parent.children.append(node)
            add(node, item.children)

    for i, sidebar in enumerate(site.sidebars):
        node = NavNode(sidebar.title or sidebar.id or f"sidebar {i + 1}")
        add(node, sidebar.contents)
        root.children.append(node)
    if site.website and site.website.navbar:
        node = NavNode("navbar")
        add(node, [*site.website.navbar.left, *site.website.navbar.right])
        root.children.append(node)
    return root
