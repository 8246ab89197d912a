"""Reference addressing request/response schemas."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class PassageRef(BaseModel):
    """Verse span inside one chapter; formatted into a reference string."""

    translation_id: str = Field(..., min_length=1, max_length=64)
    book_label: str = Field(..., min_length=1, max_length=128, description="Display name, e.g. John")
    chapter_number: int = Field(..., ge=1)
    from_verse: int = Field(..., ge=1)
    to_verse: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _check_range(self) -> "PassageRef":
        if self.from_verse > self.to_verse:
            raise ValueError("from_verse must not exceed to_verse")
        return self


class ReferenceOut(BaseModel):
    reference: str


class SelectionRectIn(BaseModel):
    top: float
    left: float
    bottom: float
    right: float


class SelectionRequest(BaseModel):
    """Verse numbers at both ends of a text selection (order not guaranteed)."""

    anchor_verse: Optional[int] = Field(None, description="Verse number where the selection started")
    focus_verse: Optional[int] = Field(None, description="Verse number where the selection ended")
    selected_text: str = ""
    rect: Optional[SelectionRectIn] = None


class VerseSelectionOut(BaseModel):
    from_verse: int
    to_verse: int
    text: str
    rect: Optional[SelectionRectIn] = None


class SelectionResponse(BaseModel):
    """selection = null when the gesture does not describe a verse span."""

    selection: Optional[VerseSelectionOut] = None
