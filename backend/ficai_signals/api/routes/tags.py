"""Tag Routes: list or search distinct tags."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.core.tag_ranking import TagScorer
from ficai_signals.infrastructure.database import get_db
from ficai_signals.schemas.signal import TagsResponse
from ficai_signals.services import tag_directory

router = APIRouter(prefix="/v1/tags", tags=["tags"])


@router.get("", response_model=TagsResponse)
async def list_tags(
    q: str | None = Query(None, max_length=200),
    limit: int | None = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
    scorer: TagScorer = Depends(tag_directory.default_scorer),
):
    """Distinct tags, closest to q first when q is given."""
    tags = [
        tag async for tag in tag_directory.iter_tags(db, q, limit, scorer)
    ]
    return TagsResponse(tags=tags)
