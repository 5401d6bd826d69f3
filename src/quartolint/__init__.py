"""quartolint: integrity checks for Quarto website projects."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from quartolint.exceptions import (
    ConfigLoadError,
    PageLoadError,
    ProjectNotFoundError,
    QuartolintError,
    RuleError,
)
from quartolint.issues import Issue
from quartolint.linter import create_context, find_project_root, lint_project
from quartolint.navigation import NavEntry, iter_nav_entries, nav_pages
from quartolint.pages import Page, discover_pages, load_page, parse_page
from quartolint.report import LintReport
from quartolint_config.lint import LintConfig
from quartolint_config.site import SiteConfig

try:
    __version__ = version("quartolint")
except PackageNotFoundError:
    __version__ = "0.0.0"

__title__ = "quartolint"
__license__ = "MIT"

__all__ = [
    "ConfigLoadError",
    "Issue",
    "LintConfig",
    "LintReport",
    "NavEntry",
    "Page",
    "PageLoadError",
    "ProjectNotFoundError",
    "QuartolintError",
    "RuleError",
    "SiteConfig",
    "create_context",
    "discover_pages",
    "find_project_root",
    "iter_nav_entries",
    "lint_project",
    "load_page",
    "nav_pages",
    "parse_page",
]
