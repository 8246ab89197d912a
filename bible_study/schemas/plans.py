"""Reading plan request/response schemas."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class PlanScopeOut(BaseModel):
    id: str
    label: str
    book_ids: List[str]


class PlanReadingIn(BaseModel):
    """Explicit reading supplied by the caller. Blank/invalid rows are dropped, not rejected."""

    translation_id: str = ""
    book_id: str = ""
    chapter_number: int = 0
    label: str = ""


class PlanReadingOut(BaseModel):
    translation_id: str
    book_id: str
    chapter_number: int
    label: str


class PlanPreviewRequest(BaseModel):
    """Body for POST /api/plans/preview."""

    scope_id: str = Field(..., min_length=1, max_length=64)
    translation_id: Optional[str] = Field(None, max_length=64, description="Defaults to DEFAULT_TRANSLATION")
    readings_per_day: float = Field(1, ge=1, le=1000)


class PlanPreviewResponse(BaseModel):
    scope_id: str
    translation_id: str
    items: List[PlanReadingOut]
    total_items: int
    readings_per_day: int
    estimated_days: int


class PlanCreateRequest(BaseModel):
    """
    Body for POST /api/plans. scope_id (generated from the content provider's catalog)
    takes precedence over items. next_reading/progress only matter for plans without items.
    """

    title: str = Field(..., max_length=512)
    scope_id: Optional[str] = Field(None, max_length=64)
    translation_id: Optional[str] = Field(None, max_length=64)
    items: List[PlanReadingIn] = Field(default_factory=list, max_length=5000)
    readings_per_day: float = Field(1, ge=1, le=1000)
    next_reading: Optional[str] = Field(None, max_length=512)
    progress: Optional[int] = None


class PlanItemOut(BaseModel):
    id: UUID
    plan_id: UUID
    translation_id: str
    book_id: str
    chapter_number: int
    label: str
    order_index: int
    completed_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PlanOut(BaseModel):
    id: UUID
    title: str
    scope_id: Optional[str] = None
    next_reading: str
    progress: int
    total_items: int
    completed_items: int
    readings_per_day: int
    estimated_days: int
    created_at: datetime
    items: List[PlanItemOut]


class PlanListResponse(BaseModel):
    plans: List[PlanOut]


class PlanItemToggleRequest(BaseModel):
    """Body for PUT /api/plans/{plan_id}/items/{item_id}."""

    completed: bool


class PlanAggregateOut(BaseModel):
    id: UUID
    progress: int
    next_reading: str
    total_items: int
    completed_items: int


class PlanItemStateOut(BaseModel):
    id: UUID
    completed_at: Optional[datetime] = None


class PlanItemToggleResponse(BaseModel):
    ok: bool = True
    plan: PlanAggregateOut
    item: PlanItemStateOut


class DailyFocusOut(BaseModel):
    plan_id: UUID
    plan_title: str
    item: PlanItemOut


class DailyFocusResponse(BaseModel):
    focus: Optional[DailyFocusOut] = None
