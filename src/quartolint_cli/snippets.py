"""The snippets command."""

from __future__ import annotations

import typer as t

from quartolint.exceptions import ConfigLoadError, ProjectNotFoundError
from quartolint_cli import resolve_project
from quartolint_cli.cli_types import OUTPUT_FORMATS
from quartolint_cli.utils import (
    check_choice,
    format_output,
    output_format_opt,
    project_arg,
)

LANGUAGE_HELP = "Snippet language to check, can be repeated (defaults to the lint settings)"


def snippets_command(
    project: str | None = project_arg,
    language: list[str] | None = t.Option(None, "--language", "-L", help=LANGUAGE_HELP),
    errors_only: bool = t.Option(False, "--errors-only", help="Only list broken snippets"),
    output_format: str = output_format_opt,
):
    """Syntax-check the code snippets embedded in pages.

    Snippets are parsed, never executed. Exits with 1 if any snippet is broken.
    """
    from quartolint.linter import create_context
    from quartolint.snippets import collect_snippets

    output_format = check_choice(output_format, OUTPUT_FORMATS, "format")
    try:
        ctx = create_context(resolve_project(project))
    except (ProjectNotFoundError, ConfigLoadError) as e:
        t.echo(f"Error: {e}", err=True)
        raise t.Exit(2) from e

    languages = language or ctx.config.snippet_languages
    snippets = collect_snippets(ctx.pages(), languages)
    rows = [
        {
            "location": f"{s.page}:{s.line}",
            "language": s.language,
            "status": "ok" if s.ok else "error",
            "error": None if s.error is None else f"line {s.error.line}: {s.error.message}",
        }
        for s in snippets
        if not (errors_only and s.ok)
    ]
    format_output(rows, output_format, title="Snippets")
    if any(not s.ok for s in snippets):
        raise t.Exit(1)
