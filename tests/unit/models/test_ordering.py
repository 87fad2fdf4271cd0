"""Tests for sibling ordering helpers."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from trpg_encounter.models.ordering import move_items, next_sort_order, renumber, sorted_by_order


@dataclass
class Item:
    name: str
    sort_order: int = 0


class TestMoveItems:
    """Tests for list-move semantics."""

    @pytest.mark.parametrize(
        ("source", "destination", "expected"),
        [
            ([0], 3, ["b", "c", "a", "d"]),
            ([0], 4, ["b", "c", "d", "a"]),
            ([3], 0, ["d", "a", "b", "c"]),
            ([1], 1, ["a", "b", "c", "d"]),
            ([1], 2, ["a", "b", "c", "d"]),
            ([0, 2], 4, ["b", "d", "a", "c"]),
        ],
    )
    def test_move(self, source: list[int], destination: int, expected: list[str]) -> None:
        assert move_items(["a", "b", "c", "d"], source, destination) == expected

    def test_invalid_source_ignored(self) -> None:
        assert move_items(["a", "b"], [5], 0) == ["a", "b"]

    def test_destination_clamped(self) -> None:
        assert move_items(["a", "b", "c"], [0], 99) == ["b", "c", "a"]


class TestSortOrder:
    """Tests for sort order bookkeeping."""

    def test_next_sort_order_empty(self) -> None:
        assert next_sort_order([]) == 0

    def test_next_sort_order_uses_max(self) -> None:
        assert next_sort_order([Item("a", 4), Item("b", 1)]) == 5

    def test_sorted_by_order_stable(self) -> None:
        items = [Item("x", 1), Item("y", 0), Item("z", 1)]
        assert [i.name for i in sorted_by_order(items)] == ["y", "x", "z"]

    def test_renumber_dense(self) -> None:
        items = [Item("a", 9), Item("b", 3), Item("c", 3)]

        renumber(items)

        assert [i.sort_order for i in items] == [0, 1, 2]
