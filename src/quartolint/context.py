"""Shared state for a lint run."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
import posixpath
from typing import TYPE_CHECKING

from quartolint.exceptions import PageLoadError
from quartolint.log import get_logger
from quartolint.navigation import iter_nav_entries
from quartolint.pages import PAGE_SUFFIXES, load_page


if TYPE_CHECKING:
    from collections.abc import Iterator

    from upath import UPath

    from quartolint.navigation import NavEntry
    from quartolint.pages import Page
    from quartolint_config.lint import LintConfig
    from quartolint_config.site import SiteConfig


logger = get_logger(__name__)


@dataclass
class LintContext:
    """Everything rules get to see about a project.

    Pages are parsed lazily and cached, so rules can freely ask for them.
    """

    root: UPath
    site: SiteConfig
    config: LintConfig
    page_paths: list[str]
    config_name: str = "_quarto.yml"
    load_errors: dict[str, str] = field(default_factory=dict)
    _pages: dict[str, Page | None] = field(default_factory=dict, repr=False)

    @cached_property
    def nav_entries(self) -> list[NavEntry]:
        return list(iter_nav_entries(self.site))

    def page(self, rel_path: str) -> Page | None:
        """Get a parsed page, None if it could not be loaded."""
        if rel_path not in self._pages:
            try:
                self._pages[rel_path] = load_page(self.root, rel_path)
            except PageLoadError as exc:
                logger.warning("%s", exc)
                self.load_errors[rel_path] = str(exc.__cause__ or exc)
                self._pages[rel_path] = None
        return self._pages[rel_path]

    def pages(self) -> Iterator[Page]:
        """Iterate over all loadable project pages."""
        for rel_path in self.page_paths:
            if (page := self.page(rel_path)) is not None:
                yield page

    def exists(self, rel_path: str) -> bool:
        return (self.root / rel_path).exists()

    def resolve(self, target: str, base: str = "") -> str | None:
        """Resolve a link target to an existing project-relative path.

        Args:
            target: Link target without fragment or query
            base: Project-relative path of the linking page, "" for the root

        Returns:
            The existing file the target refers to, None if there is none.
            `.html` targets resolve to their source page, directories to
            their index page.
        """
        if target.startswith("/"):
            path = target.lstrip("/")
        else:
            path = posixpath.join(posixpath.dirname(base), target)
        path = posixpath.normpath(path) if path else "."
        for candidate in self._candidates(path, target.endswith("/")):
            if (self.root / candidate).is_file():
                return candidate
        return None

    @staticmethod
    def _candidates(path: str, is_dir: bool) -> list[str]:
        stem, suffix = posixpath.splitext(path)
        candidates = [] if is_dir else [path]
        if suffix == ".html":
            candidates.extend(stem + s for s in PAGE_SUFFIXES)
        if is_dir or not suffix:
            prefix = "" if path == "." else f"{path}/"
            candidates.extend(f"{prefix}index{s}" for s in (*PAGE_SUFFIXES, ".html"))
        return candidates
