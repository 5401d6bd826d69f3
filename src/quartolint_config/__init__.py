"""Configuration models for quartolint."""

from __future__ import annotations

# the core package imports the config models, it has to be set up first
import quartolint  # noqa: F401
from quartolint_config.lint import LintConfig
from quartolint_config.site import (
    ExecuteConfig,
    HtmlFormatConfig,
    NavbarConfig,
    NavItem,
    PageFooterConfig,
    ProjectConfig,
    SidebarConfig,
    SiteConfig,
    SocialCardConfig,
    WebsiteConfig,
)

__all__ = [
    "ExecuteConfig",
    "HtmlFormatConfig",
    "LintConfig",
    "NavItem",
    "NavbarConfig",
    "PageFooterConfig",
    "ProjectConfig",
    "SidebarConfig",
    "SiteConfig",
    "SocialCardConfig",
    "WebsiteConfig",
]
