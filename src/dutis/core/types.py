# topmark:header:start
#
#   project      : Dutis
#   file         : types.py
#   file_relpath : src/dutis/core/types.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Value types shared by the Dutis engine.

- `Suffix`: a normalized file-name extension (lower-case, no leading dot).
- `ContentTypeIdentifier`: an opaque Uniform Type Identifier obtained from the
  platform's type service; never constructed by hand.
- `HandlerIdentifier`: an opaque application bundle identifier.
- `HandlerSet`: an immutable, lexicographically ordered set of handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NewType

from dutis.constants import DYNAMIC_UTI_PREFIX
from dutis.core.errors import EmptyInputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

Suffix = NewType("Suffix", str)
ContentTypeIdentifier = NewType("ContentTypeIdentifier", str)
HandlerIdentifier = NewType("HandlerIdentifier", str)


def normalize_suffix(raw: str) -> Suffix:
    """Return the normalized form of a user-supplied suffix.

    Surrounding whitespace and leading dots are removed and the result is
    lower-cased, so ``".MP4"``, ``"mp4"`` and ``" .mp4 "`` are all ``"mp4"``.

    Args:
        raw (str): Suffix as typed by the user or read from configuration.

    Returns:
        Suffix: The normalized suffix.

    Raises:
        EmptyInputError: If nothing remains after normalization.
    """
    cleaned = raw.strip().lstrip(".").strip().lower()
    if not cleaned:
        raise EmptyInputError("Suffix")
    return Suffix(cleaned)


def display_suffix(suffix: str) -> str:
    """Return a suffix in its presentation form, with a leading dot."""
    return f".{suffix}"


def is_dynamic(identifier: str) -> bool:
    """Return True if the identifier is a synthetic ``dyn.`` identifier.

    The type service mints these for suffixes it does not recognize; they
    usually have no registered handlers.
    """
    return identifier.startswith(DYNAMIC_UTI_PREFIX)


@dataclass(frozen=True)
class HandlerSet:
    """Deduplicated, deterministically ordered collection of handler identifiers.

    A `HandlerSet` is produced fresh per registry query and is never mutated in
    place; combining sets returns a new set.
    """

    members: frozenset[HandlerIdentifier] = field(default_factory=lambda: frozenset())

    @classmethod
    def of(cls, handlers: Iterable[str]) -> HandlerSet:
        """Build a set from raw handler strings, dropping empty entries."""
        return cls(frozenset(HandlerIdentifier(h) for h in handlers if h))

    def sorted(self) -> tuple[HandlerIdentifier, ...]:
        """Return the handlers in lexicographic order."""
        return tuple(sorted(self.members))

    def intersection(self, other: HandlerSet) -> HandlerSet:
        """Return the handlers present in both sets."""
        return HandlerSet(self.members & other.members)

    def union(self, other: HandlerSet) -> HandlerSet:
        """Return the handlers present in either set."""
        return HandlerSet(self.members | other.members)

    def __and__(self, other: HandlerSet) -> HandlerSet:
        return self.intersection(other)

    def __or__(self, other: HandlerSet) -> HandlerSet:
        return self.union(other)

    def __contains__(self, handler: object) -> bool:
        return handler in self.members

    def __iter__(self) -> Iterator[HandlerIdentifier]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self.members)

    def __bool__(self) -> bool:
        return bool(self.members)
