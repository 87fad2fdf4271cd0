"""Sibling ordering helpers.

Campaigns, adventurers, monsters and encounters each carry a ``sort_order``.
After any reorder the values among siblings are the dense range 0..n-1.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar


class Sortable(Protocol):
    sort_order: int


T = TypeVar("T")
S = TypeVar("S", bound=Sortable)


def next_sort_order(items: Iterable[Sortable]) -> int:
    """Sort order for an item appended after ``items`` (0 when empty)."""
    return max((item.sort_order for item in items), default=-1) + 1


def sorted_by_order(items: Iterable[S]) -> list[S]:
    """Return items ordered by ``sort_order``; ties keep insertion order."""
    return sorted(items, key=lambda item: item.sort_order)


def move_items(items: Sequence[T], source: Iterable[int], destination: int) -> list[T]:
    """Move the elements at ``source`` offsets so they land before ``destination``.

    ``destination`` is an offset into the original sequence, as produced by
    list drag-and-drop. Moved elements keep their relative order. Source
    offsets outside the sequence are ignored and ``destination`` is clamped
    to ``[0, len(items)]``.

    Example:
        >>> move_items(["a", "b", "c", "d"], [0], 3)
        ['b', 'c', 'a', 'd']
    """
    size = len(items)
    moving = sorted({index for index in source if 0 <= index < size})
    destination = max(0, min(size, destination))
    moving_set = set(moving)

    before = [item for index, item in enumerate(items[:destination]) if index not in moving_set]
    after = [
        item
        for index, item in enumerate(items)
        if index >= destination and index not in moving_set
    ]
    return [*before, *(items[index] for index in moving), *after]


def renumber(items: Iterable[Sortable]) -> None:
    """Rewrite ``sort_order`` to the dense range 0..n-1 in iteration order."""
    for index, item in enumerate(items):
        item.sort_order = index


__all__ = [
    "Sortable",
    "next_sort_order",
    "sorted_by_order",
    "move_items",
    "renumber",
]
