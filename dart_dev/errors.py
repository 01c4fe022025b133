"""
Custom exception types used across dart_dev.

Every error carries the process exit code the CLI reports for it, so
callers can tell "my setup is wrong" apart from "the underlying check
failed".
"""

from __future__ import annotations

from typing import Optional

EXIT_USAGE = 64
EXIT_SOFTWARE = 70
EXIT_CANTCREAT = 73
EXIT_CONFIG = 78
EXIT_NOT_FOUND = 127
EXIT_INTERRUPTED = 130


class DartDevError(Exception):
    """Base class for all dart_dev specific errors."""

    exit_code = 1


class UsageError(DartDevError):
    """Raised for bad command-line input. No task runs."""

    exit_code = EXIT_USAGE

    def __init__(self, message: str, help_text: Optional[str] = None):
        super().__init__(message)
        self.help_text = help_text


class ConfigLoadError(DartDevError):
    """Raised when the project configuration file is present but malformed."""

    exit_code = EXIT_CONFIG


class ConfigTypeError(DartDevError):
    """Raised when an overlay value has the wrong kind for its field."""

    exit_code = EXIT_CONFIG


class UnknownTaskError(DartDevError):
    """Raised when no handler is registered for a task."""

    exit_code = EXIT_SOFTWARE


class ConfigExistsError(DartDevError, FileExistsError):
    """Raised when init would overwrite an existing configuration file."""

    exit_code = EXIT_CANTCREAT


class ExternalToolFailure(DartDevError):
    """Raised when a delegated tool failed; exit_code is the tool's own."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


class ToolNotFoundError(ExternalToolFailure):
    """Raised when a delegated tool is not available on PATH."""

    def __init__(self, executable: str):
        super().__init__(f"{executable} not found on PATH", EXIT_NOT_FOUND)
        self.executable = executable


class ConfigWriteError(DartDevError):
    """Raised when init cannot create the configuration file or its directory."""

    exit_code = EXIT_CANTCREAT
