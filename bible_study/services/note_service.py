"""Notes: create / list / delete, scoped to the owner. Caller commits the session."""
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bible_study.errors import NotFoundError, ValidationError
from bible_study.logging_config import get_logger
from bible_study.models import Note

logger = get_logger(__name__)


async def create_note(
    db: AsyncSession,
    owner_id: str,
    reference: str,
    text: str,
) -> Note:
    """Create a note; reference and text are trimmed and both required."""
    reference = (reference or "").strip()
    text = (text or "").strip()
    if not reference or not text:
        raise ValidationError("Reference and text are required.", code="note_incomplete")
    note = Note(owner_id=owner_id, reference=reference, text=text)
    db.add(note)
    await db.flush()
    logger.info("note.created", note_id=str(note.id), owner_id=owner_id, reference=reference)
    return note


async def list_notes(db: AsyncSession, owner_id: str) -> List[Note]:
    """Owner's notes, newest first."""
    q = (
        select(Note)
        .where(Note.owner_id == owner_id)
        .order_by(Note.created_at.desc())
    )
    r = await db.execute(q)
    return list(r.scalars().all())


async def delete_note(db: AsyncSession, owner_id: str, note_id: UUID) -> None:
    r = await db.execute(
        delete(Note).where(Note.id == note_id, Note.owner_id == owner_id)
    )
    if not r.rowcount:
        raise NotFoundError("Note not found.", code="note_not_found")
    logger.info("note.deleted", note_id=str(note_id), owner_id=owner_id)
