"""Note and highlight request/response schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from bible_study.schemas.references import PassageRef


class NoteCreate(BaseModel):
    """
    Body for POST /api/notes: either a ready reference string or a passage to format.
    text falls back to selected_text when blank.
    """

    reference: Optional[str] = Field(None, max_length=512)
    passage: Optional[PassageRef] = None
    text: str = ""
    selected_text: str = ""

    @model_validator(mode="after")
    def _reference_or_passage(self) -> "NoteCreate":
        if not (self.reference or "").strip() and self.passage is None:
            raise ValueError("reference or passage is required")
        return self


class NoteOut(BaseModel):
    id: UUID
    reference: str
    text: str
    created_at: datetime

    model_config = {"from_attributes": True}


class HighlightCreate(BaseModel):
    """Body for POST /api/highlights."""

    reference: Optional[str] = Field(None, max_length=512)
    passage: Optional[PassageRef] = None
    color: str = Field(..., max_length=32)
    note: Optional[str] = None

    @model_validator(mode="after")
    def _reference_or_passage(self) -> "HighlightCreate":
        if not (self.reference or "").strip() and self.passage is None:
            raise ValueError("reference or passage is required")
        return self


class HighlightOut(BaseModel):
    id: UUID
    reference: str
    color: str
    note: str
    created_at: datetime

    model_config = {"from_attributes": True}
