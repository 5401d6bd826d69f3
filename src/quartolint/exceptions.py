"""Exceptions raised by quartolint."""

from __future__ import annotations


class QuartolintError(Exception):
    """Base class for all quartolint errors."""


class ConfigLoadError(QuartolintError):
    """A site or lint configuration could not be read or validated."""


class ProjectNotFoundError(QuartolintError):
    """No Quarto project (``_quarto.yml``) was found."""


class PageLoadError(QuartolintError):
    """A source page could not be read or decoded."""


class RuleError(QuartolintError):
    """Unknown rule code or invalid rule registration."""
