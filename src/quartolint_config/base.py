"""Base model for Quarto configuration sections."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict
from schemez import Schema


def to_kebab(name: str) -> str:
    """Convert a python field name to the kebab-case key Quarto uses."""
    return name.replace("_", "-")


def as_list(value: Any) -> Any:
    """Wrap a scalar in a list, leave lists (and None) alone."""
    if value is None or isinstance(value, list):
        return value
    return [value]


class QuartoModel(Schema):
    """Base for all models mirroring a `_quarto.yml` section.

    Keys are read by their kebab-case alias or by field name. Keys which are
    not modelled are kept as extra attributes, Quarto knows many more options
    than we validate.
    """

    model_config = ConfigDict(
        alias_generator=to_kebab,
        populate_by_name=True,
        extra="allow",
        use_attribute_docstrings=True,
    )
