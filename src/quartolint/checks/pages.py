"""Checks of individual pages."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from quartolint.checks.registry import rule
from quartolint.issues import Finding
from quartolint.navigation import classify_href
from quartolint.pages import PAGE_SUFFIXES
from quartolint.snippets import collect_snippets


if TYPE_CHECKING:
    from collections.abc import Iterator

    from quartolint.context import LintContext
    from quartolint.pages import Link


def _is_checkable(target: str) -> bool:
    # shortcodes, cross references and template expressions
    return not (target.startswith("@") or "{{" in target or "<" in target)


def _split_target(target: str) -> tuple[str, str | None]:
    path, _, fragment = target.partition("#")
    return path.split("?", 1)[0], fragment or None


@rule("page-load", "error", "A page could not be read")
def check_page_load(ctx: LintContext) -> Iterator[Finding]:
    for rel_path in ctx.page_paths:
        if ctx.page(rel_path) is None:
            error = ctx.load_errors[rel_path]
            yield Finding(f"Could not read page: {error}", rel_path)


@rule("front-matter", "error", "Page front matter is not valid YAML")
def check_front_matter(ctx: LintContext) -> Iterator[Finding]:
    for page in ctx.pages():
        if page.front_matter_error:
            yield Finding(f"Invalid front matter: {page.front_matter_error}", page.path, 1)


@rule("missing-title", "warning", "A page has no title")
def check_titles(ctx: LintContext) -> Iterator[Finding]:
    for page in ctx.pages():
        if page.front_matter_error is None and not page.title:
            yield Finding("Page has no title", page.path)


def _page_links(ctx: LintContext) -> Iterator[tuple[str, Link]]:
    for page in ctx.pages():
        for link in page.links:
            kind = classify_href(link.target)
            if kind in ("page", "anchor") and _is_checkable(link.target):
                yield page.path, link


@rule("broken-link", "error", "A link or image points at a file which does not exist")
def check_links(ctx: LintContext) -> Iterator[Finding]:
    for path, link in _page_links(ctx):
        target, _ = _split_target(link.target)
        if not target:
            continue
        if ctx.resolve(target, path) is None:
            what = "Image" if link.is_image else "Link"
            yield Finding(f"{what} target {link.target!r} not found", path, link.line)


@rule("broken-anchor", "warning", "A link points at an anchor which does not exist")
def check_anchors(ctx: LintContext) -> Iterator[Finding]:
    for path, link in _page_links(ctx):
        target, fragment = _split_target(link.target)
        if fragment is None or link.is_image:
            continue
        resolved = ctx.resolve(target, path) if target else path
        if resolved is None or posixpath.splitext(resolved)[1] not in PAGE_SUFFIXES:
            continue
        page = ctx.page(resolved)
        if page is not None and fragment not in page.anchors:
            msg = f"Anchor #{fragment} not found in {resolved}"
            yield Finding(msg, path, link.line)


@rule("snippet-syntax", "warning", "An embedded code snippet does not parse")
def check_snippets(ctx: LintContext) -> Iterator[Finding]:
    if not ctx.config.check_snippets:
        return
    for snippet in collect_snippets(ctx.pages(), ctx.config.snippet_languages):
        if snippet.error is not None:
            msg = f"{snippet.language} snippet does not parse: {snippet.error.message}"
            yield Finding(msg, snippet.page, snippet.error.line)


@rule("external-link", "info", "Lists external links when enabled, they are never fetched")
def list_external_links(ctx: LintContext) -> Iterator[Finding]:
    if not ctx.config.external_links:
        return
    for page in ctx.pages():
        for link in page.links:
            if classify_href(link.target) == "external":
                yield Finding(f"External link {link.target}", page.path, link.line)
