"""CLI commands for quartolint."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from upath import UPath


def resolve_project(project: str | None) -> UPath:
    """Resolve the project root from a path inside the project.

    Args:
        project: Any path inside the project. If None, uses the working directory.

    Returns:
        Directory holding `_quarto.yml`

    Raises:
        ProjectNotFoundError: If no project is found
    """
    from quartolint.linter import find_project_root

    return find_project_root(project or ".")
