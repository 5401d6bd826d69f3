"""Checks of the site navigation."""

from __future__ import annotations

from collections import Counter
import posixpath
from typing import TYPE_CHECKING

from quartolint.checks.registry import rule
from quartolint.issues import Finding
from quartolint.navigation import empty_sections, iter_sidebar_entries


if TYPE_CHECKING:
    from collections.abc import Iterator

    from quartolint.context import LintContext


@rule("missing-page", "error", "A navigation entry points at a page which does not exist")
def check_missing_pages(ctx: LintContext) -> Iterator[Finding]:
    for entry in ctx.nav_entries:
        if entry.page is None:
            continue
        if ctx.resolve(entry.page) is None:
            msg = f"{entry.location} entry {entry.label!r} points to missing page {entry.page}"
            yield Finding(msg, ctx.config_name)


@rule("duplicate-nav", "warning", "A page is listed more than once in a sidebar")
def check_duplicates(ctx: LintContext) -> Iterator[Finding]:
    for sidebar in ctx.site.sidebars:
        seen: Counter[str] = Counter()
        for entry in iter_sidebar_entries(sidebar):
            if entry.location != "sidebar" or entry.page is None:
                continue
            target = ctx.resolve(entry.page) or entry.page
            seen[target] += 1
            if seen[target] == 2:  # noqa: PLR2004
                yield Finding(f"Page {target} is listed more than once", ctx.config_name)


@rule("empty-section", "warning", "A sidebar section has no contents")
def check_empty_sections(ctx: LintContext) -> Iterator[Finding]:
    for entry in empty_sections(ctx.site):
        yield Finding(f"Section {entry.label!r} is empty", ctx.config_name)


@rule("orphan-page", "info", "A page is not reachable from the navigation")
def check_orphans(ctx: LintContext) -> Iterator[Finding]:
    website = ctx.site.website
    if not ctx.config.report_orphans or website is None:
        return
    if not website.sidebar and not website.navbar:
        return
    if any(sidebar.is_auto for sidebar in website.sidebar):
        return
    linked = {ctx.resolve(e.page) for e in ctx.nav_entries if e.page}
    for rel_path in ctx.page_paths:
        if rel_path in linked:
            continue
        if posixpath.splitext(rel_path)[0] == "index":
            continue
        page = ctx.page(rel_path)
        if page is not None and page.front_matter.get("draft") is True:
            continue
        yield Finding("Page is not linked from the site navigation", rel_path)
