"""API plans: scopes, preview, create (scope or explicit items), list, toggle item, delete, daily focus."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bible_study.config import get_settings
from bible_study.db import get_db
from bible_study.deps import get_owner_id
from bible_study.errors import ValidationError
from bible_study.models import ReadingPlan
from bible_study.schemas.common import OkResponse
from bible_study.schemas.plans import (
    DailyFocusOut,
    DailyFocusResponse,
    PlanAggregateOut,
    PlanCreateRequest,
    PlanItemOut,
    PlanItemStateOut,
    PlanItemToggleRequest,
    PlanItemToggleResponse,
    PlanListResponse,
    PlanOut,
    PlanPreviewRequest,
    PlanPreviewResponse,
    PlanReadingOut,
    PlanScopeOut,
)
from bible_study.services.content_client import fetch_book_catalog
from bible_study.services.plan_generator import PLAN_SCOPES, estimate_days, generate_readings, get_scope
from bible_study.services.plan_service import (
    create_plan,
    create_plan_from_scope,
    delete_plan,
    get_plan,
    list_plans,
    pick_daily_focus,
    plan_progress,
    toggle_item,
)
from bible_study.utils.query_params import ensure_bool_query

router = APIRouter(prefix="/api/plans", tags=["plans"])


def _plan_out(plan: ReadingPlan, include_items: bool = True) -> PlanOut:
    summary = plan_progress(plan)
    return PlanOut(
        id=plan.id,
        title=plan.title,
        scope_id=plan.scope_id,
        next_reading=summary.next_reading,
        progress=summary.progress,
        total_items=summary.total_items,
        completed_items=summary.completed_items,
        readings_per_day=plan.readings_per_day,
        estimated_days=estimate_days(summary.total_items, plan.readings_per_day),
        created_at=plan.created_at,
        items=[PlanItemOut.model_validate(i) for i in plan.items] if include_items else [],
    )


@router.get("/scopes", response_model=list[PlanScopeOut])
def get_plan_scopes() -> list[PlanScopeOut]:
    """Named scopes a plan can be generated from."""
    return [PlanScopeOut(id=s.id, label=s.label, book_ids=list(s.book_ids)) for s in PLAN_SCOPES]


@router.post("/preview", response_model=PlanPreviewResponse)
async def post_plan_preview(payload: PlanPreviewRequest) -> PlanPreviewResponse:
    """Readings a scope expands to (nothing persisted), plus estimated days at readings_per_day."""
    if get_scope(payload.scope_id) is None:
        raise ValidationError("Unknown plan scope", code="unknown_scope")
    translation_id = payload.translation_id or get_settings().default_translation
    catalog = await fetch_book_catalog(translation_id)
    readings = generate_readings(payload.scope_id, catalog, translation_id)
    rate = max(int(payload.readings_per_day), 1)
    return PlanPreviewResponse(
        scope_id=payload.scope_id,
        translation_id=translation_id,
        items=[
            PlanReadingOut(
                translation_id=r.translation_id,
                book_id=r.book_id,
                chapter_number=r.chapter_number,
                label=r.label,
            )
            for r in readings
        ],
        total_items=len(readings),
        readings_per_day=rate,
        estimated_days=estimate_days(len(readings), payload.readings_per_day),
    )


@router.get("/daily-focus", response_model=DailyFocusResponse)
async def get_daily_focus(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> DailyFocusResponse:
    """Random unread reading across the owner's plans (focus = null when none)."""
    pick = await pick_daily_focus(db, owner_id)
    if pick is None:
        return DailyFocusResponse(focus=None)
    plan, item = pick
    return DailyFocusResponse(
        focus=DailyFocusOut(
            plan_id=plan.id,
            plan_title=plan.title,
            item=PlanItemOut.model_validate(item),
        )
    )


@router.get("", response_model=PlanListResponse)
async def get_plans(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
    include_items: Optional[str] = Query(None, description="false to omit item lists"),
) -> PlanListResponse:
    """Owner's plans, newest first, with derived progress."""
    plans = await list_plans(db, owner_id)
    with_items = ensure_bool_query(include_items, default=True)
    return PlanListResponse(plans=[_plan_out(p, include_items=with_items) for p in plans])


@router.post("", response_model=PlanOut, status_code=status.HTTP_201_CREATED)
async def post_plan(
    payload: PlanCreateRequest,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> PlanOut:
    """
    Create a plan. With scope_id the readings are generated from the translation's book catalog;
    otherwise explicit items (possibly none) are used.
    """
    readings_per_day = max(int(payload.readings_per_day), 1)
    if payload.scope_id:
        if get_scope(payload.scope_id) is None:
            raise ValidationError("Unknown plan scope", code="unknown_scope")
        if not payload.title.strip():
            raise ValidationError("Title is required.", code="title_required")
        translation_id = payload.translation_id or get_settings().default_translation
        catalog = await fetch_book_catalog(translation_id)
        plan = await create_plan_from_scope(
            db,
            owner_id=owner_id,
            title=payload.title,
            scope_id=payload.scope_id,
            book_catalog=catalog,
            translation_id=translation_id,
            readings_per_day=readings_per_day,
        )
    else:
        plan = await create_plan(
            db,
            owner_id=owner_id,
            title=payload.title,
            items=[i.model_dump() for i in payload.items],
            readings_per_day=readings_per_day,
            next_reading=payload.next_reading,
            progress=payload.progress,
        )
    return _plan_out(plan)


@router.get("/{plan_id}", response_model=PlanOut)
async def get_plan_by_id(
    plan_id: UUID,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> PlanOut:
    plan = await get_plan(db, owner_id, plan_id)
    return _plan_out(plan)


@router.put("/{plan_id}/items/{item_id}", response_model=PlanItemToggleResponse)
async def put_plan_item(
    plan_id: UUID,
    item_id: UUID,
    payload: PlanItemToggleRequest,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> PlanItemToggleResponse:
    """Mark a reading completed / unread; returns the recomputed plan aggregate."""
    plan, item, result = await toggle_item(
        db,
        owner_id=owner_id,
        plan_id=plan_id,
        item_id=item_id,
        completed=payload.completed,
    )
    return PlanItemToggleResponse(
        plan=PlanAggregateOut(
            id=plan.id,
            progress=result.progress,
            next_reading=result.next_reading,
            total_items=result.total_items,
            completed_items=result.completed_items,
        ),
        item=PlanItemStateOut(id=item.id, completed_at=item.completed_at),
    )


@router.delete("/{plan_id}", response_model=OkResponse)
async def delete_plan_by_id(
    plan_id: UUID,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> OkResponse:
    await delete_plan(db, owner_id, plan_id)
    return OkResponse()
