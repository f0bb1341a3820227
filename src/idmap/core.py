"""IdMap — an ordered dict whose keys are handed out by the container.

Keys are non-negative ints taken from a cursor that only moves forward.
Removing a value never gives its key back, so a key that has been used
once is never assigned again.

Every method returns a new IdMap; the receiver is left untouched.
Entries live in a plain dict kept in ascending key order, copied on write.

update() is the one way to store at a caller-chosen key. Storing at or
above the cursor breaks the "every key < cursor" invariant and a later
insert() may overwrite that entry. Enable strict updates to have the
cursor follow such keys instead:

    idmap.set_strict_updates(True)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

V = TypeVar("V")
W = TypeVar("W")
A = TypeVar("A")

logger = logging.getLogger("idmap.core")


class _Missing:
    """Marks an absent entry in update(). There is exactly one instance."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

# ─── Configuration ───────────────────────────────────────────────────────────
_strict_updates = False


def set_strict_updates(enabled: bool) -> None:
    """Set the process-wide default for IdMap.update(strict=...).

    When enabled, update() raises the cursor past any key it stores at,
    so later inserts can never collide with it.
    """
    global _strict_updates
    _strict_updates = bool(enabled)


def strict_updates_enabled() -> bool:
    return _strict_updates


def _sorted(entries: dict[int, V]) -> dict[int, V]:
    return dict(sorted(entries.items()))


def _last_key(entries: dict[int, V]) -> int | None:
    return next(reversed(entries), None)


class IdMap(Generic[V]):
    """Ordered int-keyed container that assigns its own keys."""

    __slots__ = ("_cursor", "_entries")

    def __init__(self) -> None:
        self._cursor = 0
        self._entries: dict[int, V] = {}

    @classmethod
    def _build(cls, entries: dict[int, V], cursor: int) -> IdMap[V]:
        """Wrap already-ordered entries. Takes ownership of the dict."""
        m = cls.__new__(cls)
        m._entries = entries
        m._cursor = cursor
        return m

    # --- Construction ---

    @classmethod
    def empty(cls) -> IdMap[V]:
        return cls()

    @classmethod
    def singleton(cls, value: V) -> tuple[int, IdMap[V]]:
        return cls().insert(value)

    @classmethod
    def from_list(cls, pairs: Iterable[tuple[int, V]]) -> IdMap[V]:
        """Build from (key, value) pairs. Later duplicates win.

        The cursor is one past the largest key seen, or 0 for no pairs.
        """
        entries: dict[int, V] = {}
        for key, value in pairs:
            entries[key] = value
        cursor = max(entries) + 1 if entries else 0
        return cls._build(_sorted(entries), cursor)

    # --- Mutation (returns new IdMaps) ---

    def insert(self, value: V) -> tuple[int, IdMap[V]]:
        """Store value under the next key. Returns (key, new map)."""
        key = self._cursor
        entries = dict(self._entries)
        last = _last_key(entries)
        entries[key] = value
        if last is not None and last > key:
            # Only reachable after a non-strict update() stored past the cursor.
            entries = _sorted(entries)
        return key, self._build(entries, key + 1)

    def insert_many(self, values: Iterable[V]) -> tuple[list[int], IdMap[V]]:
        """Insert each value in order. Returns (assigned keys, new map)."""
        keys: list[int] = []
        m = self
        for value in values:
            key, m = m.insert(value)
            keys.append(key)
        return keys, m

    def update(
        self,
        key: int,
        fn: Callable[[V], V],
        *,
        strict: bool | None = None,
    ) -> IdMap[V]:
        """Replace the value at key with fn(current). MISSING removes it.

        fn receives MISSING when the key is absent, so a stored None is
        passed through as None. Return MISSING to drop the key.

        Be careful: this can store at a key >= cursor. Unless strict (see
        set_strict_updates), the cursor is left alone and a later insert()
        may reuse that key.
        """
        current = self._entries.get(key, MISSING)
        result = fn(current)
        if result is MISSING:
            return self.remove(key)

        entries = dict(self._entries)
        is_new = key not in entries
        last = _last_key(entries)
        entries[key] = result
        if is_new and last is not None and key < last:
            entries = _sorted(entries)

        if strict is None:
            strict = _strict_updates
        cursor = self._cursor
        if key >= cursor:
            if strict:
                cursor = key + 1
            else:
                logger.warning(
                    "update() stored key %d at or above cursor %d; "
                    "a later insert may overwrite it",
                    key, cursor,
                )
        return self._build(entries, cursor)

    def remove(self, key: int) -> IdMap[V]:
        """Drop key if present. The cursor is unchanged."""
        if key not in self._entries:
            return self
        entries = dict(self._entries)
        del entries[key]
        return self._build(entries, self._cursor)

    # --- Query ---

    @property
    def cursor(self) -> int:
        """The key the next insert() will assign."""
        return self._cursor

    def is_empty(self) -> bool:
        return not self._entries

    def size(self) -> int:
        return len(self._entries)

    def member(self, key: int) -> bool:
        return key < self._cursor and key in self._entries

    def get(self, key: int, default: V | None = None) -> V | None:
        return self._entries.get(key, default)

    def keys(self) -> list[int]:
        return list(self._entries)

    def values(self) -> list[V]:
        return list(self._entries.values())

    def to_list(self) -> list[tuple[int, V]]:
        return list(self._entries.items())

    # --- Transform ---

    def map(self, fn: Callable[[int, V], W]) -> IdMap[W]:
        """Apply fn(key, value) to every entry. Keys and cursor are kept."""
        return self._build(
            {key: fn(key, value) for key, value in self._entries.items()},
            self._cursor,
        )

    def foldl(self, fn: Callable[[int, V, A], A], init: A) -> A:
        """Fold fn(key, value, acc) over entries, lowest key first."""
        acc = init
        for key, value in self._entries.items():
            acc = fn(key, value, acc)
        return acc

    def foldr(self, fn: Callable[[int, V, A], A], init: A) -> A:
        """Fold fn(key, value, acc) over entries, highest key first."""
        acc = init
        for key in reversed(self._entries):
            acc = fn(key, self._entries[key], acc)
        return acc

    def filter(self, pred: Callable[[int, V], bool]) -> IdMap[V]:
        """Keep entries where pred(key, value) holds. Dropped keys stay used."""
        return self._build(
            {key: value for key, value in self._entries.items() if pred(key, value)},
            self._cursor,
        )

    def partition(self, pred: Callable[[int, V], bool]) -> tuple[IdMap[V], IdMap[V]]:
        """Split into (passing, failing). Both keep this map's cursor."""
        kept: dict[int, V] = {}
        rejected: dict[int, V] = {}
        for key, value in self._entries.items():
            if pred(key, value):
                kept[key] = value
            else:
                rejected[key] = value
        return self._build(kept, self._cursor), self._build(rejected, self._cursor)

    # --- Combinators (see idmap.combinators) ---

    def union(self, other: IdMap[V]) -> IdMap[V]:
        from idmap.combinators import union
        return union(self, other)

    def intersect(self, other: IdMap[V]) -> IdMap[V]:
        from idmap.combinators import intersect
        return intersect(self, other)

    def diff(self, other: IdMap) -> IdMap[V]:
        from idmap.combinators import diff
        return diff(self, other)

    # --- Python protocols ---

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, int) and not isinstance(key, bool) and self.member(key)

    def __getitem__(self, key: int) -> V:
        return self._entries[key]

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdMap):
            return NotImplemented
        return self._cursor == other._cursor and self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IdMap(cursor={self._cursor}, {self._entries!r})"
