"""
Plan aggregator: derive total / completed / progress / next reading from a plan's items.
Pure functions; plan_service persists the result after every toggle.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

# Terminal next-reading value once nothing is left unread.
COMPLETED_SENTINEL = "Completed"


class AggregatableItem(Protocol):
    label: str
    order_index: int
    completed_at: Optional[object]


@dataclass(frozen=True)
class PlanProgress:
    total_items: int
    completed_items: int
    progress: int
    next_reading: str


def progress_percent(completed: int, total: int) -> int:
    """round(100 * completed / total) with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    # Integer half-up rounding, avoids float and banker's rounding.
    return (200 * completed + total) // (2 * total)


def recompute(items: Iterable[AggregatableItem]) -> PlanProgress:
    """
    Aggregate over the full current item set.
    next_reading = label of the lowest order_index unread item, else COMPLETED_SENTINEL.
    """
    total = 0
    completed = 0
    next_item: Optional[AggregatableItem] = None
    for item in items:
        total += 1
        if item.completed_at is not None:
            completed += 1
        elif next_item is None or item.order_index < next_item.order_index:
            next_item = item
    return PlanProgress(
        total_items=total,
        completed_items=completed,
        progress=progress_percent(completed, total),
        next_reading=next_item.label if next_item is not None else COMPLETED_SENTINEL,
    )


def summarize(
    items: Iterable[AggregatableItem],
    stored_progress: int,
    stored_next_reading: str,
) -> PlanProgress:
    """
    Aggregate for display: same as recompute, but a plan with no items keeps
    its stored progress / next_reading (plans created without items).
    """
    result = recompute(items)
    if result.total_items == 0:
        return PlanProgress(
            total_items=0,
            completed_items=0,
            progress=stored_progress,
            next_reading=stored_next_reading,
        )
    return result
