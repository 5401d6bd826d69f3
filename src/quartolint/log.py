"""Logging configuration for quartolint."""

from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: The name of the logger, will be prefixed with 'quartolint.'

    Returns:
        A logger instance
    """
    if name == "quartolint" or name.startswith("quartolint."):
        return logging.getLogger(name)
    return logging.getLogger(f"quartolint.{name}")


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Set up basic stderr logging for command line use."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("quartolint").setLevel(level)

