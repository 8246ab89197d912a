"""Highlights: create / list / delete, scoped to the owner. Caller commits the session."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bible_study.errors import NotFoundError, ValidationError
from bible_study.logging_config import get_logger
from bible_study.models import Highlight

logger = get_logger(__name__)


async def create_highlight(
    db: AsyncSession,
    owner_id: str,
    reference: str,
    color: str,
    note: Optional[str] = None,
) -> Highlight:
    """Create a highlight; reference and color required, note optional (stored trimmed, '' when absent)."""
    reference = (reference or "").strip()
    color = (color or "").strip()
    if not reference or not color:
        raise ValidationError("Reference and color are required.", code="highlight_incomplete")
    highlight = Highlight(
        owner_id=owner_id,
        reference=reference,
        color=color,
        note=(note or "").strip(),
    )
    db.add(highlight)
    await db.flush()
    logger.info("highlight.created", highlight_id=str(highlight.id), owner_id=owner_id, color=color)
    return highlight


async def list_highlights(db: AsyncSession, owner_id: str) -> List[Highlight]:
    """Owner's highlights, newest first."""
    q = (
        select(Highlight)
        .where(Highlight.owner_id == owner_id)
        .order_by(Highlight.created_at.desc())
    )
    r = await db.execute(q)
    return list(r.scalars().all())


async def delete_highlight(db: AsyncSession, owner_id: str, highlight_id: UUID) -> None:
    r = await db.execute(
        delete(Highlight).where(Highlight.id == highlight_id, Highlight.owner_id == owner_id)
    )
    if not r.rowcount:
        raise NotFoundError("Highlight not found.", code="highlight_not_found")
    logger.info("highlight.deleted", highlight_id=str(highlight_id), owner_id=owner_id)
