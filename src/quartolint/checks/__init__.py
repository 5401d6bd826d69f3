"""Lint rules. Importing this package registers all built-in rules."""

from __future__ import annotations

from quartolint.checks.registry import Rule, RuleRegistry, registry, rule
from quartolint.checks import site, navigation, pages  # noqa: F401

__all__ = ["Rule", "RuleRegistry", "registry", "rule"]
