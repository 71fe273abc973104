# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI-specific exception hierarchy.

Each error carries a suggested exit code and formats itself for the
console.
"""

from .constants import (
    EX_CONFIG,
    EX_DATAERR,
    EX_USAGE,
    ExitCode,
)


class CLIError(Exception):
    """Base exception for all CLI-related errors.

    Attributes:
        message: Main error message
        details: Optional list of additional detail lines
        exit_code: Suggested exit code for this error type (class attribute)
    """

    exit_code: int = EX_USAGE

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    def format_for_console(self) -> str:
        lines = [f"[red]Error:[/red] {self.message}"]
        if self.details:
            lines.append("")
            for detail in self.details:
                lines.append(f"  • {detail}")
        return "\n".join(lines)


class ConfigurationError(CLIError):
    """Configuration could not be loaded or validated."""

    exit_code = EX_CONFIG


class ValidationError(CLIError):
    """Declaration files failed to parse."""

    exit_code = EX_DATAERR


class CommandError(CLIError):
    """A command ran but did not succeed (e.g. modules with build errors)."""

    exit_code = ExitCode.ERROR
