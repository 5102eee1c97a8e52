# topmark:header:start
#
#   project      : Dutis
#   file         : errors.py
#   file_relpath : src/dutis/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Exceptions for the Dutis CLI.

Raise these from commands to exit with a standardized message and exit code.
Errors are shown through the project console when one is on the Click
context, and with Click's default styling otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from dutis.cli.exit_codes import ExitCode


class DutisCliError(click.ClickException):
    """Base class for all Dutis CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (color is applied in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class DutisUsageError(DutisCliError):
    """Invalid invocation (conflicting flags, unknown group, missing suffixes)."""

    exit_code = ExitCode.USAGE_ERROR


class DutisDataError(DutisCliError):
    """Empty input, or no suffix resolved to a content type."""

    exit_code = ExitCode.DATA_ERROR


class DutisUnavailableError(DutisCliError):
    """No handler, or no handler common to every content type of the group."""

    exit_code = ExitCode.UNAVAILABLE


class DutisConfigError(DutisCliError):
    """Invalid configuration values."""

    exit_code = ExitCode.CONFIG_ERROR
