"""API highlights: list, create, delete."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bible_study.db import get_db
from bible_study.deps import get_owner_id
from bible_study.schemas.common import OkResponse
from bible_study.schemas.notes import HighlightCreate, HighlightOut
from bible_study.services.highlight_service import create_highlight, delete_highlight, list_highlights
from bible_study.services.reference_service import reference_or_passage

router = APIRouter(prefix="/api/highlights", tags=["highlights"])


@router.get("", response_model=list[HighlightOut])
async def get_highlights(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> list[HighlightOut]:
    highlights = await list_highlights(db, owner_id)
    return [HighlightOut.model_validate(h) for h in highlights]


@router.post("", response_model=HighlightOut, status_code=status.HTTP_201_CREATED)
async def post_highlight(
    payload: HighlightCreate,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> HighlightOut:
    reference = reference_or_passage(payload.reference, payload.passage)
    highlight = await create_highlight(
        db,
        owner_id=owner_id,
        reference=reference,
        color=payload.color,
        note=payload.note,
    )
    return HighlightOut.model_validate(highlight)


@router.delete("/{highlight_id}", response_model=OkResponse)
async def delete_highlight_by_id(
    highlight_id: UUID,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
) -> OkResponse:
    await delete_highlight(db, owner_id, highlight_id)
    return OkResponse()
