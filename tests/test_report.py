"""Tests for lint reports and their formatting."""

from __future__ import annotations

import json

from rich.console import Console
import yamling

from quartolint import Issue, LintReport
from quartolint.report import format_json, format_text, format_yaml, print_table


def _report() -> LintReport:
    issues = [
        Issue(rule="missing-page", severity="error", message="gone", path="_quarto.yml"),
        Issue(rule="broken-anchor", severity="warning", message="no anchor", path="a.qmd", line=3),
        Issue(rule="orphan-page", severity="info", message="lonely", path="b.qmd"),
    ]
    return LintReport(project="docs", issues=issues, pages_checked=2)


def test_counts_and_failures():
    report = _report()
    assert report.counts() == {"error": 1, "warning": 1, "info": 1}
    assert report.has_failures("error")
    assert report.model_copy(update={"issues": report.issues[1:]}).has_failures("warning")
    assert not LintReport(project="docs").has_failures("info")


def test_filtered():
    report = _report().filtered("warning")
    assert [i.rule for i in report.issues] == ["missing-page", "broken-anchor"]


def test_by_path():
    grouped = _report().by_path()
    assert list(grouped) == ["_quarto.yml", "a.qmd", "b.qmd"]


def test_issue_location():
    assert Issue(rule="x", severity="info", message="m").location == "<project>"
    assert Issue(rule="x", severity="info", message="m", path="a.qmd", line=2).location == (
        "a.qmd:2"
    )


def test_format_text():
    lines = format_text(_report()).splitlines()
    assert lines[0] == "_quarto.yml: error [missing-page] gone"
    assert lines[1] == "a.qmd:3: warning [broken-anchor] no anchor"
    assert lines[-1] == "2 pages checked: 1 error, 1 warning, 1 info"


def test_summary_without_issues():
    assert LintReport(project="docs", pages_checked=1).summary() == (
        "1 pages checked: no issues"
    )


def test_machine_readable_formats():
    data = json.loads(format_json(_report()))
    assert data["issues"][1]["line"] == 3  # noqa: PLR2004
    data = yamling.load_yaml(format_yaml(_report()))
    assert data["project"] == "docs"


def test_print_table():
    console = Console(record=True, width=120)
    print_table(_report(), console)
    output = console.export_text()
    assert "missing-page" in output
    assert "2 pages checked" in output
