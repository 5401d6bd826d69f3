"""Tests for lint settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from quartolint import ConfigLoadError, LintConfig


if TYPE_CHECKING:
    from pathlib import Path


LINT_CONFIG = """\
disable:
  - orphan-page
severity:
  broken-anchor: error
exclude:
  - drafts/*
snippet_languages: [python, yaml]
fail_on: warning
"""


def test_defaults():
    config = LintConfig()
    assert config.disable == []
    assert config.snippet_languages == ["python"]
    assert config.fail_on == "error"
    assert config.check_snippets


def test_from_file(tmp_path: Path):
    path = tmp_path / "_quartolint.yml"
    path.write_text(LINT_CONFIG)
    config = LintConfig.from_file(path)
    assert config.disable == ["orphan-page"]
    assert config.severity == {"broken-anchor": "error"}
    assert config.snippet_languages == ["python", "yaml"]
    assert config.fail_on == "warning"


def test_discover(tmp_path: Path):
    assert LintConfig.discover(tmp_path) == LintConfig()
    (tmp_path / ".quartolint.yml").write_text("report_orphans: false\n")
    assert LintConfig.discover(tmp_path).report_orphans is False


def test_unknown_key(tmp_path: Path):
    path = tmp_path / "_quartolint.yml"
    path.write_text("disabled: [orphan-page]\n")
    with pytest.raises(ConfigLoadError, match="Invalid lint config"):
        LintConfig.from_file(path)


def test_invalid_severity(tmp_path: Path):
    path = tmp_path / "_quartolint.yml"
    path.write_text("severity:\n  broken-link: fatal\n")
    with pytest.raises(ConfigLoadError):
        LintConfig.from_file(path)


def test_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("QUARTOLINT_FAIL_ON", "WARNING")
    assert LintConfig().with_env().fail_on == "warning"
    monkeypatch.setenv("QUARTOLINT_FAIL_ON", "sometimes")
    with pytest.raises(ConfigLoadError, match="QUARTOLINT_FAIL_ON"):
        LintConfig().with_env()


def test_env_unset(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("QUARTOLINT_FAIL_ON", raising=False)
    config = LintConfig(fail_on="info")
    assert config.with_env() is config
