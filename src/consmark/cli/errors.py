# topmark:header:start
#
#   project      : ConsMark
#   file         : errors.py
#   file_relpath : src/consmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ConsMark CLI.

Usage:
    Raise these exceptions in commands to stop with a standardized message
    and exit code. Library errors (`consmark.core.errors`) are translated
    with `from_library_error`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's
    default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from consmark.cli.exit_codes import ExitCode
from consmark.core.errors import ConfigError, ConsmarkError


class ConsmarkCliError(click.ClickException):
    """Base class for all ConsMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text.

        Notes:
            Unlike Click's default, no colour is added here; `show()` styles the
            message when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        obj = getattr(ctx, "obj", None) if ctx is not None else None
        console = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))


class ConsmarkUsageError(ConsmarkCliError):
    """Invalid command line (conflicting flags, bad values)."""

    exit_code = ExitCode.USAGE_ERROR


class ConsmarkConfigError(ConsmarkCliError):
    """Missing, malformed or invalid configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class ConsmarkFileNotFoundError(ConsmarkCliError):
    """Input path does not exist."""

    exit_code = ExitCode.NO_INPUT


class ConsmarkIOError(ConsmarkCliError):
    """Input could not be read."""

    exit_code = ExitCode.IO_ERROR


class ConsmarkEncodingError(ConsmarkCliError):
    """Input is not valid UTF-8."""

    exit_code = ExitCode.DATA_ERROR


class ConsmarkUnexpectedError(ConsmarkCliError):
    """Internal error reported by the markup engine."""

    exit_code = ExitCode.SOFTWARE


def from_library_error(exc: ConsmarkError) -> ConsmarkCliError:
    """Return the CLI error matching a library error."""
    if isinstance(exc, ConfigError):
        return ConsmarkConfigError(str(exc))
    return ConsmarkUnexpectedError(str(exc))
