# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Insertion-ordered set and map helpers.

Python's built-in ``set`` iterates in hash order, which differs between
runs for ``str`` keys and is unspecified in general. Everything that feeds
reconciliation output goes through these helpers instead so that identical
inputs always produce identical, identically ordered output.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, MutableSet, Set
from typing import Any, Generic, TypeVar

from .exceptions import DuplicateKeyError

T = TypeVar("T", bound=Hashable)
K = TypeVar("K", bound=Hashable)
R = TypeVar("R")


class OrderedSet(MutableSet, Generic[T]):
    """A set that iterates in insertion order.

    Backed by a ``dict`` with ``None`` values, so membership tests are O(1)
    and re-adding an existing element keeps its original position. Equality
    is order-insensitive, as for any other ``Set``; ``-`` keeps this set's
    order, while ``&`` follows the right operand, so prefer ``intersect``.

    Example:
        s = OrderedSet([b"b", b"a", b"b"])
        list(s)  # [b"b", b"a"]
        list(s.subtract([b"b"]))  # [b"a"]
    """

    __slots__ = ("_items",)

    def __init__(self, iterable: Iterable[T] = ()) -> None:
        self._items: dict[T, None] = dict.fromkeys(iterable)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def add(self, value: T) -> None:
        self._items[value] = None

    def discard(self, value: T) -> None:
        self._items.pop(value, None)

    def subtract(self, *others: Iterable[T]) -> OrderedSet[T]:
        """Return the elements of this set not found in any of ``others``.

        The result keeps this set's order.
        """
        excluded: set[T] = set()
        for other in others:
            excluded.update(other)
        return OrderedSet(item for item in self._items if item not in excluded)

    def intersect(self, other: Iterable[T]) -> OrderedSet[T]:
        """Return the elements of this set also found in ``other``, in this set's order."""
        keep = other if isinstance(other, (Set, dict)) else set(other)
        return OrderedSet(item for item in self._items if item in keep)


def index_by(records: Iterable[R], key: Callable[[R], K]) -> dict[K, R]:
    """Build an insertion-ordered map from ``key(record)`` to record.

    Raises:
        DuplicateKeyError: If two records share a key.
    """
    index: dict[K, R] = {}
    for record in records:
        k = key(record)
        if k in index:
            raise DuplicateKeyError(k)
        index[k] = record
    return index


def identities_of(records: Iterable[Any]) -> OrderedSet[bytes]:
    """Collect the ``identity`` attribute of each record, in sequence order."""
    return OrderedSet(record.identity for record in records)


def select(records: Iterable[R], identities: Set[bytes]) -> tuple[R, ...]:
    """Return the records whose ``identity`` is in ``identities``, in sequence order."""
    return tuple(record for record in records if record.identity in identities)  # type: ignore[attr-defined]
