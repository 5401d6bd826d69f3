"""JSON schemas of the configuration files, for editor completion."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from quartolint.log import get_logger
from quartolint_config.lint import LintConfig
from quartolint_config.site import SiteConfig


if TYPE_CHECKING:
    from quartolint.common_types import StrPath


logger = get_logger(__name__)

SCHEMAS: Final = {
    "lint-config-schema.json": LintConfig,
    "site-config-schema.json": SiteConfig,
}


def build_schemas() -> dict[str, dict[str, Any]]:
    """JSON schemas by file name."""
    return {
        name: model.model_json_schema(by_alias=True) for name, model in SCHEMAS.items()
    }


def write_schemas(output_dir: StrPath, *, check_only: bool = False) -> list[str]:
    """Write the schemas into a directory.

    Args:
        output_dir: Target directory, created if missing
        check_only: Only compare with the existing files, don't write

    Returns:
        Names of the schema files which changed (or would change)
    """
    from upath import UPath

    root = UPath(output_dir)
    changed: list[str] = []
    for name, schema in build_schemas().items():
        path = root / name
        current = None
        if path.exists():
            try:
                current = json.loads(path.read_text(encoding="utf-8"))
            except ValueError as exc:
                logger.warning("Failed to read current schema %s: %s", path, exc)
        if current == schema:
            logger.info("Schema %s unchanged", name)
            continue
        changed.append(name)
        if not check_only:
            root.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")
            logger.info("Schema written to %s", path)
    return changed
