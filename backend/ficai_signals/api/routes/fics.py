"""Fic Routes: resolve fic metadata for a URL, list URLs that carry signals.

Invariants:
    - Upstream failures surface as a generic 500 UPSTREAM_ERROR
    - /v1/urls lists only URLs with at least one signal row
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.core.repository_protocols import FicMetaSource
from ficai_signals.infrastructure.database import get_db
from ficai_signals.infrastructure.fichub_client import get_fic_meta_source
from ficai_signals.schemas.fic import FicResponse, UrlsResponse
from ficai_signals.services import fic_resolver

router = APIRouter(prefix="/v1", tags=["fics"])


@router.get("/fics", response_model=FicResponse)
async def resolve_fic(
    url: str = Query(..., min_length=1, max_length=2048),
    db: AsyncSession = Depends(get_db),
    source: FicMetaSource = Depends(get_fic_meta_source),
):
    """Canonical fic identity for a story URL."""
    meta = await fic_resolver.resolve_fic(db, source, url)
    return FicResponse(id=meta.id, title=meta.title, source=meta.source)


@router.get("/urls", response_model=UrlsResponse)
async def list_urls(db: AsyncSession = Depends(get_db)):
    """All fic URLs with at least one signal."""
    return UrlsResponse(urls=[url async for url in fic_resolver.iter_urls(db)])
