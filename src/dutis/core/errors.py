# topmark:header:start
#
#   project      : Dutis
#   file         : errors.py
#   file_relpath : src/dutis/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Exceptions raised by the Dutis engine.

Every native-call failure is recovered into one of these kinds; nothing in the
engine terminates the process. "No handlers found" and "no common handler" are
legitimate outcomes rather than errors and are reported through
[`GroupStatus`][dutis.engine.group.GroupStatus].
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dutis.core.diagnostics import Diagnostic


class DutisError(Exception):
    """Base class for all Dutis engine errors."""


class EmptyInputError(DutisError, ValueError):
    """A suffix, content type or handler identifier was empty.

    Raised before any native call is made; never retried.
    """

    def __init__(self, what: str) -> None:
        super().__init__(f"{what} cannot be empty")
        self.what = what


class ResolutionExhaustedError(DutisError):
    """The type-identifier service returned no identifier for a suffix."""

    def __init__(self, suffix: str) -> None:
        super().__init__(f"No content type identifier could be resolved for '.{suffix}'")
        self.suffix = suffix


class AssignmentError(DutisError):
    """The final attempt to assign a default handler returned a non-zero status.

    Attributes:
        content_type (str): Identifier whose default handler was being set.
        handler (str): Handler identifier that was being assigned.
        code (int): Status returned by the last native call.
    """

    def __init__(self, content_type: str, handler: str, code: int) -> None:
        super().__init__(
            f"Failed to set '{handler}' as default handler for '{content_type}' "
            f"(error code: {code})"
        )
        self.content_type = content_type
        self.handler = handler
        self.code = code


class NoValidIdentifiersError(DutisError):
    """Every suffix of a group failed to resolve.

    Attributes:
        diagnostics (tuple[Diagnostic, ...]): The per-suffix failures.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        super().__init__("None of the given suffixes resolved to a content type identifier")
        self.diagnostics = tuple(diagnostics)
