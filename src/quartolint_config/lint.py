"""Lint settings (`_quartolint.yml`)."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Final, Self

from pydantic import ConfigDict, Field, ValidationError
from schemez import Schema

from quartolint.common_types import Severity
from quartolint.exceptions import ConfigLoadError
from quartolint.log import get_logger


if TYPE_CHECKING:
    from quartolint.common_types import StrPath


logger = get_logger(__name__)

LINT_CONFIG_NAMES: Final = ("_quartolint.yml", ".quartolint.yml")
FAIL_ON_ENV: Final = "QUARTOLINT_FAIL_ON"


class LintConfig(Schema):
    """Settings controlling which rules run and how results are judged."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    disable: list[str] = Field(default_factory=list)
    """Rule codes which are not run."""

    severity: dict[str, Severity] = Field(default_factory=dict)
    """Severity overrides by rule code."""

    exclude: list[str] = Field(default_factory=list)
    """Glob patterns (relative to the project root) of pages to skip."""

    check_snippets: bool = True
    """Whether embedded code snippets are syntax-checked."""

    snippet_languages: list[str] = Field(default_factory=lambda: ["python"])
    """Languages of snippets to check."""

    report_orphans: bool = True
    """Whether pages missing from the navigation are reported."""

    external_links: bool = False
    """Whether external links are listed. They are never fetched."""

    fail_on: Severity = "error"
    """Lowest severity which makes a run fail."""

    def with_env(self) -> Self:
        """Return a copy with environment overrides applied."""
        if not (fail_on := os.getenv(FAIL_ON_ENV)):
            return self
        try:
            return self.model_validate({**self.model_dump(), "fail_on": fail_on.lower()})
        except ValidationError as exc:
            msg = f"Invalid value for {FAIL_ON_ENV}: {fail_on!r}"
            raise ConfigLoadError(msg) from exc

    @classmethod
    def from_file(cls, path: StrPath) -> Self:
        """Load lint settings from a YAML file.

        Raises:
            ConfigLoadError: If the file can't be read or holds invalid settings
        """
        import yamling
        from upath import UPath

        path = UPath(path)
        try:
            data: Any = yamling.load_yaml(path.read_text(encoding="utf-8"), mode="safe")
        except Exception as exc:
            msg = f"Failed to load lint config from {path}: {exc}"
            raise ConfigLoadError(msg) from exc
        try:
            return cls.model_validate(data or {})
        except ValidationError as exc:
            msg = f"Invalid lint config {path}: {exc}"
            raise ConfigLoadError(msg) from exc

    @classmethod
    def discover(cls, project_dir: StrPath) -> Self:
        """Load lint settings from the project root, defaults if there are none."""
        from upath import UPath

        root = UPath(project_dir)
        for name in LINT_CONFIG_NAMES:
            candidate = root / name
            if candidate.is_file():
                logger.debug("Using lint config %s", candidate)
                return cls.from_file(candidate)
        return cls()
