# topmark:header:start
#
#   project      : Dutis
#   file         : logging.py
#   file_relpath : src/dutis/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Dutis logging: a TRACE level, a logger class and chalk-colored records.

The convergence loops log every native attempt at TRACE through
[`DutisLogger.attempt`][dutis.config.logging.DutisLogger.attempt], so a flaky
registry can be inspected (``DUTIS_LOG_LEVEL=TRACE``) without drowning DEBUG
output. Log records go to stderr; stdout is reserved for program output such as
handler lists, which users pipe into other tools.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from dutis.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5


class DutisLogger(logging.Logger):
    """Logger with a TRACE level below DEBUG and a helper for retry attempts."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg=msg, args=args, extra=extra, stacklevel=2)

    def attempt(self, action: str, subject: str, attempt: int, attempts: int, outcome: str) -> None:
        """Log one attempt of a bounded retry loop at TRACE.

        Args:
            action (str): What is being attempted (``"query"``, ``"assign"``).
            subject (str): The content type (and handler) concerned.
            attempt (int): 1-based attempt number.
            attempts (int): Attempt budget.
            outcome (str): Short description of the result of this attempt.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg="%s %s [%d/%d]: %s",
                args=(action, subject, attempt, attempts, outcome),
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(DutisLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}

# Highest threshold first; the first threshold at or below a record's level picks its style.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record according to its severity."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then color it by level (dim red below TRACE)."""
        message = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return cast("Callable[[str], str]", chalk.dim.red)(message)


def parse_log_level(value: str | None) -> int | None:
    """Return a logging level for a level name or number, or None if unrecognized.

    Accepts names such as ``"TRACE"`` or ``"debug"`` and numeric strings such as ``"10"``.
    """
    if not value:
        return None
    v = value.strip().upper()
    if v.isdigit():
        return int(v)
    return _LEVEL_NAMES.get(v)


def resolve_env_log_level() -> int | None:
    """Return the level requested through ``DUTIS_LOG_LEVEL``, or None if unset or invalid."""
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR))


def setup_logging(level: int | None = None) -> None:
    """Send Dutis log records to stderr at ``level``.

    If ``level`` is None, ``DUTIS_LOG_LEVEL`` is consulted via
    [`resolve_env_log_level`][dutis.config.logging.resolve_env_log_level];
    the default is CRITICAL, which keeps normal runs silent.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace, never stack, handlers when called again (tests, repeated CLI runs)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> DutisLogger:
    """Return the `DutisLogger` registered under ``name``."""
    return cast("DutisLogger", logging.getLogger(name))
