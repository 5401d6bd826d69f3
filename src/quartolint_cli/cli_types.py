"""Type definitions for CLI options."""

from __future__ import annotations

from typing import Final, Literal, get_args


# Log levels
LogLevel = Literal["debug", "info", "warning", "error"]

# Output formats of the check command
OutputFormat = Literal["text", "table", "json", "yaml"]

# Output formats of the nav command
NavFormat = Literal["tree", "json", "yaml"]

LOG_LEVELS: Final = get_args(LogLevel)
OUTPUT_FORMATS: Final = get_args(OutputFormat)
NAV_FORMATS: Final = get_args(NavFormat)
SEVERITIES: Final = ("info", "warning", "error")
