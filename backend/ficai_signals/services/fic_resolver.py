"""Fic Metadata Resolver & Cache: URL → canonical fic identity, with a permanent cache.

Invariants:
    - Cache lookup is by the literal URL string, no normalization
    - A cache hit never calls the external source
    - Cache entries never expire
    - On a miss: one bounded external call; success upserts fic + cache row in
      one transaction, failure raises UpstreamError and writes nothing
    - The URL catalog is SELECT DISTINCT url over signals, not over the cache

Design Decisions:
    - Concurrent first-time lookups of the same URL may both reach the source;
      the upserts converge because the same URL resolves to the same fic id
    - The cache row update only moves fetched_at forward
    - The cache read transaction is closed before the external call, so no
      pooled connection sits idle in a transaction while waiting on it
"""

import logging
from collections.abc import AsyncIterator
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.core.domain_types import FicId, FicMeta
from ficai_signals.core.repository_protocols import FicMetaSource
from ficai_signals.infrastructure.database import upsert_insert
from ficai_signals.models.fic import Fic, FicUrlCache
from ficai_signals.models.signal import Signal

logger = logging.getLogger(__name__)


async def _cached(db: AsyncSession, url: str) -> FicMeta | None:
    result = await db.execute(
        select(Fic)
        .join(FicUrlCache, FicUrlCache.fic_id == Fic.id)
        .where(FicUrlCache.url == url),
    )
    fic = result.scalar_one_or_none()
    if fic is None:
        return None
    return FicMeta(id=FicId(fic.id), title=fic.title, source=fic.source_url)


async def _store(db: AsyncSession, url: str, meta: FicMeta) -> None:
    insert = upsert_insert(db)

    fic_stmt = insert(Fic).values(
        id=meta.id, source_url=meta.source, title=meta.title,
    )
    fic_stmt = fic_stmt.on_conflict_do_update(
        index_elements=["id"],
        set_={
            "source_url": fic_stmt.excluded.source_url,
            "title": fic_stmt.excluded.title,
        },
    )

    cache_stmt = insert(FicUrlCache).values(
        url=url, fic_id=meta.id, fetched_at=datetime.now(timezone.utc),
    )
    cache_stmt = cache_stmt.on_conflict_do_update(
        index_elements=["url"],
        set_={
            "fic_id": cache_stmt.excluded.fic_id,
            "fetched_at": cache_stmt.excluded.fetched_at,
        },
        where=FicUrlCache.__table__.c.fetched_at <= cache_stmt.excluded.fetched_at,
    )

    try:
        await db.execute(fic_stmt)
        await db.execute(cache_stmt)
        await db.commit()
    except Exception:
        await db.rollback()
        raise


async def resolve_fic(
    db: AsyncSession, source: FicMetaSource, url: str,
) -> FicMeta:
    """Resolve a URL via cache, falling back to one external lookup."""
    cached = await _cached(db, url)
    if cached is not None:
        logger.debug("Fic cache hit", extra={"url": url, "fic_id": cached.id})
        return cached

    # no open transaction across the external call
    await db.rollback()
    meta = await source.meta(url)
    await _store(db, url, meta)
    logger.info("Fic cached", extra={"url": url, "fic_id": meta.id})
    return meta


async def iter_urls(db: AsyncSession) -> AsyncIterator[str]:
    """Distinct URLs that still have at least one signal row."""
    result = await db.execute(
        select(Signal.url).distinct().order_by(Signal.url),
    )
    for url in result.scalars():
        yield url
