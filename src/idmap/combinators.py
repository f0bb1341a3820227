"""Pairwise combinators over two IdMaps.

Every result takes the larger of the two cursors, so inserting into the
result can never reuse a key from either input.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from idmap.core import IdMap

V = TypeVar("V")
L = TypeVar("L")
R = TypeVar("R")
A = TypeVar("A")


def union(a: IdMap[V], b: IdMap[V]) -> IdMap[V]:
    """Entries of a, plus entries of b whose keys a lacks. a wins on collision."""
    entries = dict(a._entries)
    for key, value in b._entries.items():
        entries.setdefault(key, value)
    return IdMap._build(dict(sorted(entries.items())), max(a.cursor, b.cursor))


def intersect(a: IdMap[V], b: IdMap) -> IdMap[V]:
    """Entries of a whose keys are also in b."""
    entries = {key: value for key, value in a._entries.items() if key in b._entries}
    return IdMap._build(entries, max(a.cursor, b.cursor))


def diff(a: IdMap[V], b: IdMap) -> IdMap[V]:
    """Entries of a whose keys are not in b."""
    entries = {key: value for key, value in a._entries.items() if key not in b._entries}
    return IdMap._build(entries, max(a.cursor, b.cursor))


def merge(
    only_a: Callable[[int, L, A], A],
    on_both: Callable[[int, L, R, A], A],
    only_b: Callable[[int, R, A], A],
    a: IdMap[L],
    b: IdMap[R],
    init: A,
) -> A:
    """Walk the keys of a and b together in ascending order.

    For each key exactly one callback runs, threading the accumulator:
        only_a(key, a_value, acc)           key only in a
        on_both(key, a_value, b_value, acc) key in both
        only_b(key, b_value, acc)           key only in b

    Usage:
        merge(
            lambda k, x, acc: acc + [("a", x)],
            lambda k, x, y, acc: acc + [("both", x, y)],
            lambda k, y, acc: acc + [("b", y)],
            left, right, [],
        )
    """
    left = a.to_list()
    right = b.to_list()
    acc = init
    i = j = 0
    while i < len(left) and j < len(right):
        lkey, lvalue = left[i]
        rkey, rvalue = right[j]
        if lkey < rkey:
            acc = only_a(lkey, lvalue, acc)
            i += 1
        elif rkey < lkey:
            acc = only_b(rkey, rvalue, acc)
            j += 1
        else:
            acc = on_both(lkey, lvalue, rvalue, acc)
            i += 1
            j += 1
    for key, value in left[i:]:
        acc = only_a(key, value, acc)
    for key, value in right[j:]:
        acc = only_b(key, value, acc)
    return acc
