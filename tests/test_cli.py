"""Tests for the command line interface."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from quartolint.__main__ import cli


if TYPE_CHECKING:
    from pathlib import Path


runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("QUARTOLINT_FAIL_ON", raising=False)


def test_check_clean_project(project: Path):
    result = runner.invoke(cli, ["check", str(project)])
    assert result.exit_code == 0
    assert "5 pages checked: no issues" in result.stdout


def test_check_from_subdirectory(project: Path):
    result = runner.invoke(cli, ["check", str(project / "examples")])
    assert result.exit_code == 0


def test_check_reports_errors(make_project):
    root = make_project({"tutorial.qmd": None})
    result = runner.invoke(cli, ["check", str(root)])
    assert result.exit_code == 1
    assert "[missing-page]" in result.stdout


def test_check_json_output(make_project):
    root = make_project({"orphan.qmd": "# Orphan\n"})
    result = runner.invoke(cli, ["check", str(root), "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [i["rule"] for i in data["issues"]] == ["orphan-page"]


def test_check_fail_on(make_project):
    root = make_project({"orphan.qmd": "# Orphan\n"})
    result = runner.invoke(cli, ["check", str(root), "--fail-on", "info"])
    assert result.exit_code == 1


def test_check_fail_on_from_env(make_project, monkeypatch: pytest.MonkeyPatch):
    root = make_project({"orphan.qmd": "# Orphan\n"})
    monkeypatch.setenv("QUARTOLINT_FAIL_ON", "info")
    assert runner.invoke(cli, ["check", str(root)]).exit_code == 1


def test_check_min_severity_and_disable(make_project):
    root = make_project({"orphan.qmd": "# Orphan\n"})
    result = runner.invoke(cli, ["check", str(root), "--min-severity", "warning"])
    assert "orphan-page" not in result.stdout
    result = runner.invoke(cli, ["check", str(root), "--disable", "orphan-page"])
    assert "no issues" in result.stdout


def test_check_with_lint_config(make_project, tmp_path: Path):
    root = make_project({"orphan.qmd": "# Orphan\n"})
    config = tmp_path / "lint.yml"
    config.write_text("fail_on: info\n")
    result = runner.invoke(cli, ["check", str(root), "--config", str(config)])
    assert result.exit_code == 1


def test_check_unknown_rule(project: Path):
    result = runner.invoke(cli, ["check", str(project), "--select", "nope"])
    assert result.exit_code == 2  # noqa: PLR2004
    assert "Unknown rule" in result.output


def test_check_no_project(tmp_path: Path):
    result = runner.invoke(cli, ["check", str(tmp_path)])
    assert result.exit_code == 2  # noqa: PLR2004


def test_check_invalid_format(project: Path):
    result = runner.invoke(cli, ["check", str(project), "--format", "xml"])
    assert result.exit_code != 0


def test_nav_tree(make_project):
    root = make_project({"tutorial.qmd": None})
    result = runner.invoke(cli, ["nav", str(root)])
    assert result.exit_code == 0
    assert "Basics" in result.stdout
    assert "(missing)" in result.stdout


def test_nav_json(project: Path):
    result = runner.invoke(cli, ["nav", str(project), "--format", "json"])
    assert result.exit_code == 0
    entries = json.loads(result.stdout)
    tutorial = next(e for e in entries if e["href"] == "tutorial.qmd")
    assert tutorial["section"] == "Basics"
    assert tutorial["exists"] is True


def test_pages(project: Path):
    result = runner.invoke(cli, ["pages", str(project), "--format", "json"])
    assert result.exit_code == 0
    pages = {p["path"]: p for p in json.loads(result.stdout)}
    assert pages["agents.qmd"]["title"] == "Agents"
    assert pages["agents.qmd"]["in_nav"] is True
    assert pages["agents.qmd"]["code_blocks"] == 2  # noqa: PLR2004


def test_snippets(make_project):
    page = "---\ntitle: Broken\n---\n\n```python\nx = (\n```\n"
    root = make_project({"broken.qmd": page})
    result = runner.invoke(cli, ["snippets", str(root), "--errors-only", "--format", "json"])
    assert result.exit_code == 1
    rows = json.loads(result.stdout)
    assert [row["location"] for row in rows] == ["broken.qmd:6"]


def test_snippets_clean(project: Path):
    result = runner.invoke(cli, ["snippets", str(project)])
    assert result.exit_code == 0
    assert "agents.qmd" in result.stdout


def test_rules():
    result = runner.invoke(cli, ["rules", "--format", "json"])
    assert result.exit_code == 0
    codes = {rule["code"] for rule in json.loads(result.stdout)}
    assert {"missing-page", "broken-link", "snippet-syntax"} <= codes
