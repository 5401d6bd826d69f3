"""Shared options and output helpers for the CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import typer as t

from quartolint_cli.cli_types import LOG_LEVELS, OUTPUT_FORMATS, SEVERITIES


if TYPE_CHECKING:
    from collections.abc import Sequence


PROJECT_HELP = "Path inside the Quarto project (defaults to the working directory)"
FORMAT_HELP = f"Output format ({', '.join(OUTPUT_FORMATS)})"
LOG_LEVEL_HELP = f"Log level ({', '.join(LOG_LEVELS)})"
CONFIG_HELP = "Lint settings file (defaults to _quartolint.yml in the project)"

project_arg = t.Argument(None, help=PROJECT_HELP)
output_format_opt = t.Option("text", "--format", "-f", help=FORMAT_HELP)
log_level_opt = t.Option("warning", "--log-level", "-l", help=LOG_LEVEL_HELP)
config_opt = t.Option(None, "--config", "-c", help=CONFIG_HELP)


def check_choice(value: str, choices: Sequence[str], name: str) -> str:
    """Validate an option value against a set of choices."""
    value = value.lower()
    if value not in choices:
        msg = f"{name} must be one of {', '.join(choices)}, got {value!r}"
        raise t.BadParameter(msg)
    return value


def check_severity(value: str, name: str = "severity") -> str:
    return check_choice(value, SEVERITIES, name)


def setup_logging(log_level: str) -> None:
    from quartolint.log import configure_logging

    configure_logging(check_choice(log_level, LOG_LEVELS, "log level"))


def format_output(
    rows: Sequence[dict[str, Any]],
    output_format: str,
    *,
    title: str | None = None,
) -> None:
    """Print a list of records in the requested format."""
    match output_format:
        case "json":
            t.echo(json.dumps(list(rows), indent=2, default=str))
        case "yaml":
            import yamling

            t.echo(yamling.dump_yaml(list(rows)))
        case "table":
            from rich.console import Console
            from rich.table import Table

            table = Table(title=title)
            columns = list(rows[0]) if rows else []
            for column in columns:
                table.add_column(column.replace("_", " ").title())
            for row in rows:
                table.add_row(*("" if row[c] is None else str(row[c]) for c in columns))
            Console().print(table)
        case _:
            for row in rows:
                t.echo("  ".join("" if v is None else str(v) for v in row.values()))
