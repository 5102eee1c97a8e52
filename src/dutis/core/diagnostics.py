# topmark:header:start
#
#   project      : Dutis
#   file         : diagnostics.py
#   file_relpath : src/dutis/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Diagnostics support.

Group operations never abort on the first failing unit: each suffix that fails
to resolve and each identifier that fails to take a new default is recorded as
a `Diagnostic` carrying the unit it concerns (its *context*) and a message.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class DiagnosticLevel(Enum):
    """Severity of a diagnostic; ERROR marks a suffix or identifier that failed."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, a message and the unit it concerns.

    Attributes:
        level (DiagnosticLevel): Severity.
        message (str): Human-readable description.
        context (str): The suffix, identifier or config key the message is about
            (empty when the diagnostic is global).
    """

    level: DiagnosticLevel
    message: str
    context: str = ""

    def as_pair(self) -> tuple[str, str]:
        """Return the ``(context, message)`` pair used for display."""
        return (self.context, self.message)


@dataclass
class DiagnosticLog:
    """Append-only collection of diagnostics with level-specific helpers."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add(self, level: DiagnosticLevel, message: str, context: str = "") -> Diagnostic:
        """Record a diagnostic and return it."""
        diag = Diagnostic(level=level, message=message, context=context)
        self.items.append(diag)
        return diag

    def add_info(self, message: str, context: str = "") -> Diagnostic:
        """Record an INFO diagnostic."""
        return self.add(DiagnosticLevel.INFO, message, context)

    def add_warning(self, message: str, context: str = "") -> Diagnostic:
        """Record a WARNING diagnostic."""
        return self.add(DiagnosticLevel.WARNING, message, context)

    def add_error(self, message: str, context: str = "") -> Diagnostic:
        """Record an ERROR diagnostic."""
        return self.add(DiagnosticLevel.ERROR, message, context)

    def extend(self, diags: Iterable[Diagnostic]) -> None:
        """Append diagnostics from another source, preserving order."""
        self.items.extend(diags)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class DiagnosticStats:
    """Number of diagnostics per severity."""

    n_info: int = 0
    n_warning: int = 0
    n_error: int = 0

    @property
    def total(self) -> int:
        return self.n_info + self.n_warning + self.n_error


def compute_diagnostic_stats(diags: Iterable[Diagnostic]) -> DiagnosticStats:
    """Count ``diags`` by level."""
    counts = Counter(d.level for d in diags)
    return DiagnosticStats(
        n_info=counts[DiagnosticLevel.INFO],
        n_warning=counts[DiagnosticLevel.WARNING],
        n_error=counts[DiagnosticLevel.ERROR],
    )
