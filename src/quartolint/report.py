"""Lint results and their output formats."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from pydantic import Field
from schemez import Schema

from quartolint.common_types import SEVERITY_ORDER, Severity, severity_at_least
from quartolint.issues import Issue


if TYPE_CHECKING:
    from rich.console import Console


SEVERITY_STYLES = {"error": "bold red", "warning": "yellow", "info": "cyan"}


class LintReport(Schema):
    """Result of linting one project."""

    project: str
    """Project root."""

    issues: list[Issue] = Field(default_factory=list)
    """Issues sorted by location."""

    pages_checked: int = 0
    nav_entries: int = 0

    def counts(self) -> dict[Severity, int]:
        """Number of issues per severity."""
        counts: dict[Severity, int] = {"error": 0, "warning": 0, "info": 0}
        for issue in self.issues:
            counts[issue.severity] += 1
        return counts

    def has_failures(self, fail_on: Severity = "error") -> bool:
        return any(severity_at_least(i.severity, fail_on) for i in self.issues)

    def by_path(self) -> dict[str | None, list[Issue]]:
        grouped: dict[str | None, list[Issue]] = defaultdict(list)
        for issue in self.issues:
            grouped[issue.path].append(issue)
        return dict(grouped)

    def filtered(self, min_severity: Severity) -> LintReport:
        """Copy of the report without issues below `min_severity`."""
        issues = [i for i in self.issues if severity_at_least(i.severity, min_severity)]
        return self.model_copy(update={"issues": issues})

    def summary(self) -> str:
        parts = []
        for severity, n in self.counts().items():
            if n:
                plural = "s" if n != 1 and severity != "info" else ""
                parts.append(f"{n} {severity}{plural}")
        found = ", ".join(parts) if parts else "no issues"
        return f"{self.pages_checked} pages checked: {found}"


def format_text(report: LintReport) -> str:
    """One line per issue, like compilers print them."""
    lines = [
        f"{issue.location}: {issue.severity} [{issue.rule}] {issue.message}"
        for issue in report.issues
    ]
    lines.append(report.summary())
    return "\n".join(lines)


def format_json(report: LintReport) -> str:
    return report.model_dump_json(indent=2)


def format_yaml(report: LintReport) -> str:
    import yamling

    return yamling.dump_yaml(report.model_dump(mode="json"))


def print_table(report: LintReport, console: Console | None = None) -> None:
    """Print the report as a rich table."""
    from rich.console import Console
    from rich.table import Table

    console = console or Console()
    if report.issues:
        table = Table(title=f"Issues in {report.project}")
        table.add_column("Location", style="dim")
        table.add_column("Severity")
        table.add_column("Rule")
        table.add_column("Message")
        ordered = sorted(report.issues, key=lambda i: -SEVERITY_ORDER[i.severity])
        for issue in ordered:
            style = SEVERITY_STYLES[issue.severity]
            severity = f"[{style}]{issue.severity}[/{style}]"
            table.add_row(issue.location, severity, issue.rule, issue.message)
        console.print(table)
    console.print(report.summary())
