"""Type definitions."""

from __future__ import annotations

import os
from typing import Final, Literal


type StrPath = str | os.PathLike[str]

Severity = Literal["info", "warning", "error"]
LinkKind = Literal["page", "external", "anchor", "auto"]
NavLocation = Literal["sidebar", "sidebar-tools", "navbar", "page-footer"]

SEVERITY_ORDER: Final[dict[str, int]] = {"info": 0, "warning": 1, "error": 2}


def severity_at_least(severity: Severity, threshold: Severity) -> bool:
    """Check whether `severity` is at or above `threshold`."""
    return SEVERITY_ORDER[severity] >= SEVERITY_ORDER[threshold]
