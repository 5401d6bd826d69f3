"""Running the rules against a project."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quartolint.checks import registry
from quartolint.context import LintContext
from quartolint.exceptions import ConfigLoadError, ProjectNotFoundError
from quartolint.issues import Issue
from quartolint.log import get_logger
from quartolint.pages import discover_pages
from quartolint.report import LintReport
from quartolint_config.lint import LintConfig
from quartolint_config.site import CONFIG_FILE_NAMES, SiteConfig


if TYPE_CHECKING:
    from collections.abc import Sequence

    from upath import UPath

    from quartolint.common_types import StrPath


logger = get_logger(__name__)


def find_config_file(project_dir: StrPath) -> UPath | None:
    """Return the site config file of a project directory, if it has one."""
    from upath import UPath

    root = UPath(project_dir)
    for name in CONFIG_FILE_NAMES:
        if (candidate := root / name).is_file():
            return candidate
    return None


def find_project_root(start: StrPath = ".") -> UPath:
    """Walk upwards from `start` to the first directory holding `_quarto.yml`.

    Raises:
        ProjectNotFoundError: If no parent directory is a Quarto project
    """
    from upath import UPath

    path = UPath(start).absolute()
    if path.is_file():
        path = path.parent
    for directory in (path, *path.parents):
        if find_config_file(directory) is not None:
            return directory
    msg = f"No _quarto.yml found in {path} or any parent directory"
    raise ProjectNotFoundError(msg)


def create_context(project_dir: StrPath, config: LintConfig | None = None) -> LintContext:
    """Load the site config and discover pages.

    Raises:
        ProjectNotFoundError: If the directory has no site config
        ConfigLoadError: If the site config is invalid
    """
    from upath import UPath

    root = UPath(project_dir)
    config_file = find_config_file(root)
    if config_file is None:
        msg = f"{root} is not a Quarto project (no _quarto.yml)"
        raise ProjectNotFoundError(msg)
    if config is None:
        config = LintConfig.discover(root)
    site = SiteConfig.from_file(config_file)
    pages = discover_pages(root, output_dir=site.output_dir, exclude=config.exclude)
    return LintContext(root, site, config, pages, config_name=config_file.name)


def lint_project(
    project_dir: StrPath,
    config: LintConfig | None = None,
    *,
    select: Sequence[str] | None = None,
) -> LintReport:
    """Check a Quarto project.

    Args:
        project_dir: Project root
        config: Lint settings, discovered from the project when not given
        select: Only run these rules

    Returns:
        Report with all issues, sorted by location. An unloadable site
        config gives a single `config` issue.

    Raises:
        ProjectNotFoundError: If the directory has no site config
        RuleError: If a selected, disabled or re-rated rule is unknown
    """
    from upath import UPath

    root = UPath(project_dir)
    config = config or LintConfig.discover(root)
    rules = registry.select(select, config.disable)
    for code in config.severity:
        registry.get(code)
    try:
        ctx = create_context(root, config)
    except ConfigLoadError as exc:
        logger.warning("Site config could not be loaded: %s", exc)
        name = config_file.name if (config_file := find_config_file(root)) else None
        issue = Issue(rule="config", severity="error", message=str(exc), path=name)
        return LintReport(project=str(root), issues=[issue])

    logger.info("Checking %d pages with %d rules in %s", len(ctx.page_paths), len(rules), root)
    issues: list[Issue] = []
    for rule in rules:
        found = list(rule.run(ctx, config.severity.get(rule.code)))
        logger.debug("Rule %s: %d issue(s)", rule.code, len(found))
        issues.extend(found)
    issues.sort(key=Issue.sort_key)
    return LintReport(
        project=str(root),
        issues=issues,
        pages_checked=len(ctx.page_paths),
        nav_entries=len(ctx.nav_entries),
    )
