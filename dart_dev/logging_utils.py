"""
Logging helpers for dart_dev.

Log records go to stderr; relayed tool output goes to stdout, so the two
never interleave in a redirected stream.
"""

from __future__ import annotations

import logging

RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


class ColorFormatter(logging.Formatter):
    """Wrap each formatted record in the ANSI color for its level."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return text
        return f"{color}{text}{RESET}"


def log_level(verbosity: int = 0, quiet: bool = False) -> int:
    """
    Map the CLI flags to a level.

    quiet         -> WARNING
    verbosity 0   -> INFO
    verbosity >= 1 -> DEBUG
    """

    if quiet:
        return logging.WARNING
    if verbosity <= 0:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0, quiet: bool = False, color: bool = True) -> None:
    """Configure the root logger for a dart_dev run."""

    level = log_level(verbosity, quiet)
    fmt = "%(levelname)s %(name)s: %(message)s" if level == logging.DEBUG else "%(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(fmt) if color else logging.Formatter(fmt))
    logging.basicConfig(level=level, handlers=[handler], force=True)
