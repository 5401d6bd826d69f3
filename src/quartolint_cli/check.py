"""The check command."""

from __future__ import annotations

import logging

import typer as t

from quartolint.exceptions import ConfigLoadError, ProjectNotFoundError, RuleError
from quartolint_cli import resolve_project
from quartolint_cli.cli_types import OUTPUT_FORMATS
from quartolint_cli.utils import (
    check_choice,
    check_severity,
    config_opt,
    log_level_opt,
    output_format_opt,
    project_arg,
    setup_logging,
)


logger = logging.getLogger(__name__)

FAIL_ON_HELP = "Lowest severity which fails the run (info, warning, error)"
MIN_SEVERITY_HELP = "Hide issues below this severity"
DISABLE_HELP = "Rule code to skip, can be repeated"
SELECT_HELP = "Only run this rule, can be repeated"


def check_command(
    project: str | None = project_arg,
    config: str | None = config_opt,
    output_format: str = output_format_opt,
    fail_on: str | None = t.Option(None, "--fail-on", help=FAIL_ON_HELP),
    min_severity: str = t.Option("info", "--min-severity", help=MIN_SEVERITY_HELP),
    disable: list[str] | None = t.Option(None, "--disable", "-d", help=DISABLE_HELP),
    select: list[str] | None = t.Option(None, "--select", "-s", help=SELECT_HELP),
    log_level: str = log_level_opt,
):
    """Check a Quarto project for broken navigation, links and snippets.

    Exits with 1 when an issue reaches the fail-on severity, with 2 when the
    project or its settings can't be loaded.

    Examples:
        # Check the project in the working directory
        quartolint check

        # Fail on warnings too, print a table
        quartolint check docs --fail-on warning --format table

        # Only look for missing pages
        quartolint check docs --select missing-page
    """
    from quartolint.linter import lint_project
    from quartolint.report import format_json, format_text, format_yaml, print_table
    from quartolint_config.lint import LintConfig

    setup_logging(log_level)
    output_format = check_choice(output_format, OUTPUT_FORMATS, "format")
    min_severity = check_severity(min_severity, "min-severity")
    try:
        root = resolve_project(project)
        settings = LintConfig.from_file(config) if config else LintConfig.discover(root)
        settings = settings.with_env()
        updates: dict = {"disable": [*settings.disable, *(disable or [])]}
        if fail_on:
            updates["fail_on"] = check_severity(fail_on, "fail-on")
        settings = settings.model_copy(update=updates)
        report = lint_project(root, settings, select=select or None)
    except (ProjectNotFoundError, ConfigLoadError, RuleError) as e:
        t.echo(f"Error: {e}", err=True)
        raise t.Exit(2) from e
    except t.BadParameter:
        raise
    except Exception as e:
        logger.exception("Failed to check project")
        raise t.Exit(1) from e

    shown = report.filtered(min_severity)  # type: ignore[arg-type]
    match output_format:
        case "json":
            t.echo(format_json(shown))
        case "yaml":
            t.echo(format_yaml(shown))
        case "table":
            print_table(shown)
        case _:
            t.echo(format_text(shown))

    if report.has_failures(settings.fail_on):
        raise t.Exit(1)
