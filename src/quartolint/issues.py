"""Lint issue model."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ConfigDict
from schemez import Schema

from quartolint.common_types import Severity  # noqa: TC001


class Issue(Schema):
    """A single problem found in a project."""

    model_config = ConfigDict(frozen=True, use_attribute_docstrings=True)

    rule: str
    """Code of the rule which reported the issue."""

    severity: Severity
    """Effective severity after overrides."""

    message: str
    """Human readable description."""

    path: str | None = None
    """Project-relative file the issue is located in."""

    line: int | None = None
    """1-based line number, if known."""

    @property
    def location(self) -> str:
        if self.path is None:
            return "<project>"
        return f"{self.path}:{self.line}" if self.line else self.path

    def sort_key(self) -> tuple[str, int, str]:
        return (self.path or "", self.line or 0, self.rule)


@dataclass(frozen=True)
class Finding:
    """What a rule reports, turned into an `Issue` by the rule registry."""

    message: str
    path: str | None = None
    line: int | None = None
