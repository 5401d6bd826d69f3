"""The rules command."""

from __future__ import annotations

from quartolint_cli.cli_types import OUTPUT_FORMATS
from quartolint_cli.utils import check_choice, format_output, output_format_opt


def rules_command(output_format: str = output_format_opt):
    """List the available rules and their default severities."""
    from quartolint.checks import registry

    output_format = check_choice(output_format, OUTPUT_FORMATS, "format")
    rows = [
        {"code": r.code, "severity": r.severity, "description": r.description}
        for r in registry
    ]
    format_output(rows, output_format, title="Rules")
