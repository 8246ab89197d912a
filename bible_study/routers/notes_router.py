"""API notes: list, create (reference string or passage), delete."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bible_study.db import get_db
from bible_study.deps import get_owner_id
from bible_study.schemas.common import OkResponse
from bible_study.schemas.notes import NoteCreate, NoteOut
from bible_study.services.note_service import create_note, delete_note, list_notes
from bible_study.services.reference_service import reference_or_passage

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=list[NoteOut])
async def get_notes(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> list[NoteOut]:
    notes = await list_notes(db, owner_id)
    return [NoteOut.model_validate(n) for n in notes]


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
async def post_note(
    payload: NoteCreate,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> NoteOut:
    """Save a note; a blank text falls back to the selected verse text."""
    reference = reference_or_passage(payload.reference, payload.passage)
    text = payload.text if payload.text.strip() else payload.selected_text
    note = await create_note(db, owner_id=owner_id, reference=reference, text=text)
    return NoteOut.model_validate(note)


@router.delete("/{note_id}", response_model=OkResponse)
async def delete_note_by_id(
    note_id: UUID,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> OkResponse:
    await delete_note(db, owner_id, note_id)
    return OkResponse()
