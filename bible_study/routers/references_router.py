"""API references: format a verse span, resolve a text-selection gesture."""
from fastapi import APIRouter

from bible_study.schemas.references import (
    PassageRef,
    ReferenceOut,
    SelectionRectIn,
    SelectionRequest,
    SelectionResponse,
    VerseSelectionOut,
)
from bible_study.services.reference_service import SelectionRect, format_reference, resolve_selection

router = APIRouter(prefix="/api/references", tags=["references"])


@router.post("/format", response_model=ReferenceOut)
def post_format_reference(payload: PassageRef) -> ReferenceOut:
    reference = format_reference(
        payload.translation_id,
        payload.book_label,
        payload.chapter_number,
        payload.from_verse,
        payload.to_verse,
    )
    return ReferenceOut(reference=reference)


@router.post("/selection", response_model=SelectionResponse)
def post_resolve_selection(payload: SelectionRequest) -> SelectionResponse:
    """Ordered verse span of a selection, or selection = null."""
    rect = SelectionRect(**payload.rect.model_dump()) if payload.rect else None
    selection = resolve_selection(payload.anchor_verse, payload.focus_verse, payload.selected_text, rect)
    if selection is None:
        return SelectionResponse(selection=None)
    return SelectionResponse(
        selection=VerseSelectionOut(
            from_verse=selection.from_verse,
            to_verse=selection.to_verse,
            text=selection.text,
            rect=SelectionRectIn(**vars(selection.rect)) if selection.rect else None,
        )
    )
