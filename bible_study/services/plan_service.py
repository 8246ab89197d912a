"""
Reading plans: create (explicit items or generated from a scope), list, toggle item completion, delete.
Mutating operations commit here: a toggle writes one item row and the plan's aggregate columns
in one transaction, or nothing at all (StorageFailure).
"""
import asyncio
import random
import weakref
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bible_study.db import utcnow
from bible_study.errors import NotFoundError, StorageFailure, ValidationError
from bible_study.logging_config import get_logger
from bible_study.models import PlanItem, ReadingPlan
from bible_study.services.plan_aggregator import PlanProgress, recompute, summarize
from bible_study.services.plan_generator import BookCatalogEntry, GeneratedReading, generate_readings, get_scope

logger = get_logger(__name__)

# Per-plan locks: toggles on one plan are serialized (item write + recompute + plan write).
_plan_locks: "weakref.WeakValueDictionary[UUID, asyncio.Lock]" = weakref.WeakValueDictionary()

ReadingInput = Union[GeneratedReading, Mapping[str, Any]]


def _plan_lock(plan_id: UUID) -> asyncio.Lock:
    lock = _plan_locks.get(plan_id)
    if lock is None:
        lock = asyncio.Lock()
        _plan_locks[plan_id] = lock
    return lock


def sanitize_readings(items: Iterable[ReadingInput]) -> List[GeneratedReading]:
    """
    Normalise caller items (GeneratedReading or dicts with translation_id/book_id/chapter_number/label).
    Strings are trimmed; items with a blank field or chapter_number < 1 are dropped.
    """
    out: List[GeneratedReading] = []
    for item in items:
        if isinstance(item, GeneratedReading):
            raw = {
                "translation_id": item.translation_id,
                "book_id": item.book_id,
                "chapter_number": item.chapter_number,
                "label": item.label,
            }
        else:
            raw = item
        try:
            chapter = int(raw.get("chapter_number") or 0)
        except (TypeError, ValueError):
            chapter = 0
        reading = GeneratedReading(
            translation_id=str(raw.get("translation_id") or "").strip(),
            book_id=str(raw.get("book_id") or "").strip(),
            chapter_number=chapter,
            label=str(raw.get("label") or "").strip(),
        )
        if reading.translation_id and reading.book_id and reading.label and reading.chapter_number > 0:
            out.append(reading)
    return out


def plan_progress(plan: ReadingPlan) -> PlanProgress:
    """Aggregate view of a plan with its items loaded (stored fallback for item-less plans)."""
    return summarize(plan.items, plan.progress, plan.next_reading)


async def create_plan(
    db: AsyncSession,
    owner_id: str,
    title: str,
    items: Iterable[ReadingInput] = (),
    readings_per_day: int = 1,
    next_reading: Optional[str] = None,
    progress: Optional[int] = None,
    scope_id: Optional[str] = None,
) -> ReadingPlan:
    """
    Create a plan and its items (order_index = position) in one commit.
    With items: progress is forced to 0 and next_reading to the first label.
    Without items: the given next_reading / progress (clamped to 0..100) are stored as-is.
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise ValidationError("Title is required.", code="title_required")

    readings = sanitize_readings(items)
    safe_progress = max(0, min(int(progress or 0), 100))
    plan = ReadingPlan(
        owner_id=owner_id,
        title=clean_title,
        scope_id=scope_id,
        readings_per_day=max(int(readings_per_day or 1), 1),
        progress=safe_progress,
        next_reading=(next_reading or "").strip(),
        total_items=0,
        completed_items=0,
    )
    now = utcnow()
    plan.created_at = now
    plan.items = [
        PlanItem(
            translation_id=r.translation_id,
            book_id=r.book_id,
            chapter_number=r.chapter_number,
            label=r.label,
            order_index=index,
            completed_at=None,
            created_at=now,
        )
        for index, r in enumerate(readings)
    ]
    if readings:
        plan.progress = 0
        plan.next_reading = readings[0].label
        plan.total_items = len(readings)

    try:
        db.add(plan)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("plan.create_failed", owner_id=owner_id, error=str(e))
        raise StorageFailure("Could not save plan.") from e

    logger.info(
        "plan.created",
        plan_id=str(plan.id),
        owner_id=owner_id,
        scope_id=scope_id,
        total_items=plan.total_items,
    )
    return plan


async def create_plan_from_scope(
    db: AsyncSession,
    owner_id: str,
    title: str,
    scope_id: str,
    book_catalog: Mapping[str, BookCatalogEntry],
    translation_id: str,
    readings_per_day: int = 1,
) -> ReadingPlan:
    """Generate chapter readings for scope_id against book_catalog and create the plan."""
    if get_scope(scope_id) is None:
        raise ValidationError(f"Unknown plan scope: {scope_id}", code="unknown_scope")
    readings = generate_readings(scope_id, book_catalog, translation_id)
    return await create_plan(
        db,
        owner_id=owner_id,
        title=title,
        items=readings,
        readings_per_day=readings_per_day,
        scope_id=scope_id,
    )


async def list_plans(db: AsyncSession, owner_id: str) -> List[ReadingPlan]:
    """Owner's plans, newest first, items loaded in order_index order."""
    q = (
        select(ReadingPlan)
        .where(ReadingPlan.owner_id == owner_id)
        .options(selectinload(ReadingPlan.items))
        .order_by(ReadingPlan.created_at.desc())
    )
    r = await db.execute(q)
    return list(r.scalars().all())


async def get_plan(db: AsyncSession, owner_id: str, plan_id: UUID) -> ReadingPlan:
    """One plan of the owner with items loaded; NotFoundError otherwise."""
    r = await db.execute(
        select(ReadingPlan)
        .where(ReadingPlan.id == plan_id, ReadingPlan.owner_id == owner_id)
        .options(selectinload(ReadingPlan.items))
    )
    plan = r.scalar_one_or_none()
    if plan is None:
        raise NotFoundError("Plan not found.", code="plan_not_found")
    return plan


async def toggle_item(
    db: AsyncSession,
    owner_id: str,
    plan_id: UUID,
    item_id: UUID,
    completed: bool,
) -> Tuple[ReadingPlan, PlanItem, PlanProgress]:
    """
    Mark an item completed (completed_at = now, kept if already set) or unread (completed_at = NULL),
    then recompute the aggregate from the persisted item rows and store it on the plan.
    Raises NotFoundError when the plan is not the owner's or the item is not in the plan (nothing written).
    """
    async with _plan_lock(plan_id):
        r = await db.execute(
            select(ReadingPlan)
            .where(ReadingPlan.id == plan_id, ReadingPlan.owner_id == owner_id)
            .with_for_update()
        )
        plan = r.scalar_one_or_none()
        if plan is None:
            raise NotFoundError("Plan not found.", code="plan_not_found")

        # Re-read the row: an item already in this session's identity map may be stale.
        r = await db.execute(
            select(PlanItem)
            .where(PlanItem.id == item_id, PlanItem.plan_id == plan_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        item = r.scalar_one_or_none()
        if item is None:
            raise NotFoundError("Plan item not found.", code="plan_item_not_found")

        try:
            if completed:
                if item.completed_at is None:
                    item.completed_at = utcnow()
            else:
                item.completed_at = None
            await db.flush()

            r = await db.execute(
                select(PlanItem)
                .where(PlanItem.plan_id == plan_id)
                .order_by(PlanItem.order_index)
                .execution_options(populate_existing=True)
            )
            result = recompute(r.scalars().all())
            plan.progress = result.progress
            plan.next_reading = result.next_reading
            plan.total_items = result.total_items
            plan.completed_items = result.completed_items
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "plan.toggle_failed",
                plan_id=str(plan_id),
                item_id=str(item_id),
                error=str(e),
            )
            raise StorageFailure("Could not update plan progress.") from e

    logger.info(
        "plan.item_toggled",
        plan_id=str(plan_id),
        item_id=str(item_id),
        completed=completed,
        progress=result.progress,
        completed_items=result.completed_items,
        total_items=result.total_items,
    )
    return plan, item, result


async def delete_plan(db: AsyncSession, owner_id: str, plan_id: UUID) -> None:
    """Delete the owner's plan and its items in one commit. NotFoundError if absent/foreign."""
    async with _plan_lock(plan_id):
        r = await db.execute(
            select(ReadingPlan.id).where(ReadingPlan.id == plan_id, ReadingPlan.owner_id == owner_id)
        )
        if r.scalar_one_or_none() is None:
            raise NotFoundError("Plan not found.", code="plan_not_found")
        try:
            await db.execute(delete(PlanItem).where(PlanItem.plan_id == plan_id))
            await db.execute(
                delete(ReadingPlan).where(ReadingPlan.id == plan_id, ReadingPlan.owner_id == owner_id)
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("plan.delete_failed", plan_id=str(plan_id), error=str(e))
            raise StorageFailure("Could not delete plan.") from e
    logger.info("plan.deleted", plan_id=str(plan_id), owner_id=owner_id)


async def pick_daily_focus(
    db: AsyncSession,
    owner_id: str,
    rng: Optional[random.Random] = None,
) -> Optional[Tuple[ReadingPlan, PlanItem]]:
    """Uniform random unread item across all of the owner's plans; None when everything is read."""
    q = (
        select(PlanItem, ReadingPlan)
        .join(ReadingPlan, ReadingPlan.id == PlanItem.plan_id)
        .where(ReadingPlan.owner_id == owner_id, PlanItem.completed_at.is_(None))
        .order_by(ReadingPlan.created_at.desc(), PlanItem.order_index)
    )
    r = await db.execute(q)
    candidates = [(plan, item) for item, plan in r.all()]
    if not candidates:
        return None
    return (rng or random).choice(candidates)
