"""Derived plan fields: totals, progress rounding, next reading."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import pytest

from bible_study.services.plan_aggregator import (
    COMPLETED_SENTINEL,
    PlanProgress,
    progress_percent,
    recompute,
    summarize,
)

DONE = datetime(2026, 1, 1, tzinfo=timezone.utc)


@dataclass
class Item:
    label: str
    order_index: int
    completed_at: Optional[datetime] = None


def _items(n: int, completed: set = frozenset()) -> list:
    return [Item(f"Reading {i}", i, DONE if i in completed else None) for i in range(n)]


def test_empty_plan() -> None:
    assert recompute([]) == PlanProgress(0, 0, 0, COMPLETED_SENTINEL)


def test_fresh_plan_points_at_first_item() -> None:
    result = recompute(_items(27))
    assert result == PlanProgress(27, 0, 0, "Reading 0")


def test_one_of_27_completed() -> None:
    result = recompute(_items(27, {0}))
    assert result.completed_items == 1
    assert result.total_items == 27
    assert result.progress == 4
    assert result.next_reading == "Reading 1"


def test_all_completed_yields_sentinel() -> None:
    result = recompute(_items(2, {0, 1}))
    assert result.progress == 100
    assert result.next_reading == COMPLETED_SENTINEL


def test_next_reading_uses_order_index_not_list_position() -> None:
    items = [Item("C", 2), Item("A", 0, DONE), Item("B", 1)]
    assert recompute(items).next_reading == "B"


def test_gap_in_completion() -> None:
    """Reading out of order: next is the lowest unread index."""
    result = recompute(_items(5, {0, 2, 3}))
    assert result.next_reading == "Reading 1"
    assert result.completed_items == 3


@pytest.mark.parametrize(
    "completed,total,expected",
    [(1, 8, 13), (1, 200, 1), (1, 3, 33), (2, 3, 67), (1, 27, 4), (5, 10, 50), (0, 5, 0), (5, 5, 100), (0, 0, 0)],
)
def test_progress_rounds_half_up(completed: int, total: int, expected: int) -> None:
    assert progress_percent(completed, total) == expected


def test_bounds_hold_for_every_completion_count() -> None:
    for total in range(1, 40):
        for completed in range(total + 1):
            result = recompute(_items(total, set(range(completed))))
            assert result.completed_items <= result.total_items
            assert 0 <= result.progress <= 100


def test_recompute_is_idempotent() -> None:
    items = _items(10, {1, 4, 9})
    assert recompute(items) == recompute(items)


def test_summarize_falls_back_to_stored_values_without_items() -> None:
    assert summarize([], 40, "Psalm 23") == PlanProgress(0, 0, 40, "Psalm 23")


def test_summarize_matches_recompute_with_items() -> None:
    items = _items(4, {0})
    assert summarize(items, 99, "stale") == recompute(items)
