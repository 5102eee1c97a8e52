# topmark:header:start
#
#   project      : Dutis
#   file         : bimap.py
#   file_relpath : src/dutis/core/bimap.py
#   license      : MIT
#   copyright    : (c) 2025 The Dutis authors
#
# topmark:header:end

"""Strict one-to-one bidirectional map.

`BiMap` keeps a forward (key -> value) and a reverse (value -> key) dict in
lock step. Each key maps to at most one value and each value to at most one
key. Inserting a pair evicts any existing pair that shares its key *or* its
value, so that group operations observe "last write wins" per key and per
value.

Invariant (after every operation):
    ``len(forward) == len(reverse)`` and every ``(k, v)`` in forward has
    ``(v, k)`` in reverse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Generic, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import ItemsView, Iterator, KeysView, ValuesView

K = TypeVar("K")
V = TypeVar("V")
D = TypeVar("D")

_MISSING: Final[object] = object()


class BiMap(Generic[K, V]):
    """Bijective key <-> value container with eviction-on-conflict insertion.

    Lookups in either direction are O(1). Iteration (`items`, `keys`, `values`)
    returns live dict views: lazy, finite and restartable, in arbitrary order.
    Callers that need determinism must sort.
    """

    __slots__ = ("_forward", "_reverse")

    def __init__(self) -> None:
        self._forward: dict[K, V] = {}
        self._reverse: dict[V, K] = {}

    # --- mutation ---

    def insert(self, key: K, value: V) -> tuple[K, V] | None:
        """Insert the pair ``(key, value)``, evicting any pair sharing either side.

        The pair holding ``value`` is removed first, then the pair holding
        ``key``. When *both* removals hit (two distinct stale pairs), the
        key of the first and the value of the second are reported merged as
        one evicted pair.

        Example:
            After ``insert("a", "x")`` and ``insert("b", "y")``,
            ``insert("a", "y")`` returns ``("b", "x")``.

        Args:
            key (K): Key of the new pair.
            value (V): Value of the new pair.

        Returns:
            tuple[K, V] | None: The merged evicted pair when both a key-side and a
                value-side pair were evicted; ``None`` otherwise (including when
                only one side, or neither, had a prior pair).
        """
        old_key = self._pop_by_value(value)
        old_value = self._pop_by_key(key)

        self._forward[key] = value
        self._reverse[value] = key

        if old_key is _MISSING or old_value is _MISSING:
            return None
        return (cast("K", old_key), cast("V", old_value))

    def remove_by_key(self, key: K) -> V | None:
        """Remove the pair holding ``key`` and return its value (None if absent)."""
        value = self._pop_by_key(key)
        return None if value is _MISSING else cast("V", value)

    def remove_by_value(self, value: V) -> K | None:
        """Remove the pair holding ``value`` and return its key (None if absent)."""
        key = self._pop_by_value(value)
        return None if key is _MISSING else cast("K", key)

    def clear(self) -> None:
        """Remove every pair."""
        self._forward.clear()
        self._reverse.clear()

    def _pop_by_key(self, key: K) -> object:
        value = self._forward.pop(key, _MISSING)
        if value is not _MISSING:
            del self._reverse[cast("V", value)]
        return value

    def _pop_by_value(self, value: V) -> object:
        key = self._reverse.pop(value, _MISSING)
        if key is not _MISSING:
            del self._forward[cast("K", key)]
        return key

    # --- lookup ---

    def get_by_key(self, key: K, default: D | None = None) -> V | D | None:
        """Return the value paired with ``key``, or ``default``."""
        return self._forward.get(key, default)

    def get_by_value(self, value: V, default: D | None = None) -> K | D | None:
        """Return the key paired with ``value``, or ``default``."""
        return self._reverse.get(value, default)

    def contains_key(self, key: object) -> bool:
        """Return True if ``key`` is paired."""
        return key in self._forward

    def contains_value(self, value: object) -> bool:
        """Return True if ``value`` is paired."""
        return value in self._reverse

    def is_empty(self) -> bool:
        """Return True if the map holds no pairs."""
        return not self._forward

    # --- iteration ---

    def items(self) -> ItemsView[K, V]:
        """Return a live view of the ``(key, value)`` pairs."""
        return self._forward.items()

    def keys(self) -> KeysView[K]:
        """Return a live view of the keys."""
        return self._forward.keys()

    def values(self) -> ValuesView[V]:
        """Return a live view of the values."""
        return self._forward.values()

    def inverse(self) -> dict[V, K]:
        """Return a snapshot of the reverse mapping."""
        return dict(self._reverse)

    # --- dunder ---

    def __len__(self) -> int:
        return len(self._forward)

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward)

    def __contains__(self, key: object) -> bool:
        return key in self._forward

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BiMap):
            return NotImplemented
        return self._forward == cast("BiMap[K, V]", other)._forward

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self._forward.items())
        return f"{type(self).__name__}({{{pairs}}})"
