"""The pages command."""

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


def pages_command(
    project: str | None = project_arg,
    output_format: str = output_format_opt,
):
    """List the source pages of a project."""
    from quartolint.linter import create_context

    output_format = check_choice(output_format, OUTPUT_FORMATS, "format")
    try:
        ctx = create_context(resolve_project(project))
    except (ProjectNotFoundError, ConfigLoadError) as e:
        t.echo(f"Error: {e}", err=True)
        raise t.Exit(2) from e

    linked = {ctx.resolve(e.page) for e in ctx.nav_entries if e.page}
    rows = []
    for rel_path in ctx.page_paths:
        page = ctx.page(rel_path)
        rows.append({
            "path": rel_path,
            "title": page.title if page else None,
            "in_nav": rel_path in linked,
            "links": len(page.links) if page else 0,
            "code_blocks": len(page.code_blocks) if page else 0,
        })
    format_output(rows, output_format, title=f"Pages of {ctx.root}")
