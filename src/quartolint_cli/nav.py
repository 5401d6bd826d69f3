"""The nav command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer as t

from quartolint.exceptions import ConfigLoadError, ProjectNotFoundError
from quartolint_cli import resolve_project
from quartolint_cli.cli_types import NAV_FORMATS
from quartolint_cli.utils import check_choice, format_output, project_arg


if TYPE_CHECKING:
    from rich.tree import Tree

    from quartolint.context import LintContext
    from quartolint.navigation import NavNode

NAV_FORMAT_HELP = f"Output format ({', '.join(NAV_FORMATS)})"


def _add_nodes(tree: Tree, node: NavNode, ctx: LintContext):
    from quartolint.navigation import classify_href, normalize_page_ref

    for child in node.children:
        label = child.title
        if child.href and child.href != child.title:
            label = f"{label} [dim]({child.href})[/dim]"
        if child.href and classify_href(child.href) == "page":
            if ctx.resolve(normalize_page_ref(child.href)) is None:
                label = f"{label} [bold red](missing)[/bold red]"
        branch = tree.add(label)
        _add_nodes(branch, child, ctx)


def nav_command(
    project: str | None = project_arg,
    output_format: str = t.Option("tree", "--format", "-f", help=NAV_FORMAT_HELP),
):
    """Show the site navigation, marking entries whose page is missing."""
    from rich.console import Console
    from rich.tree import Tree

    from quartolint.linter import create_context
    from quartolint.navigation import build_tree

    output_format = check_choice(output_format, NAV_FORMATS, "format")
    try:
        ctx = create_context(resolve_project(project))
    except (ProjectNotFoundError, ConfigLoadError) as e:
        t.echo(f"Error: {e}", err=True)
        raise t.Exit(2) from e

    if output_format == "tree":
        root = build_tree(ctx.site)
        tree = Tree(f"[bold]{root.title}[/bold]")
        _add_nodes(tree, root, ctx)
        Console().print(tree)
        return

    rows = [
        {
            "location": entry.location,
            "section": " > ".join(entry.trail),
            "text": entry.text,
            "href": entry.href,
            "kind": entry.kind,
            "exists": ctx.resolve(entry.page) is not None if entry.page else None,
        }
        for entry in ctx.nav_entries
    ]
    format_output(rows, output_format)
