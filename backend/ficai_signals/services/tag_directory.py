"""Tag Directory: distinct-tag listing and fuzzy search over the signal ledger.

Invariants:
    - Tags are SELECT DISTINCT over signals: no tag table, nothing to drift
    - A tag disappears the moment its last signal row is erased
    - Without a query: lexicographic order, limit pushed into SQL
    - With a query: every distinct tag scored in-process by the injected
      TagScorer, closest first, ties lexicographic

Design Decisions:
    - Async generator: callers stream results and can start over by calling again
"""

from collections.abc import AsyncIterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ficai_signals.core.tag_ranking import SequenceMatcherScorer, TagScorer, rank_tags
from ficai_signals.models.signal import Signal


def default_scorer() -> TagScorer:
    """FastAPI dependency: the tag similarity scorer."""
    return SequenceMatcherScorer()


async def iter_tags(
    db: AsyncSession,
    query: str | None = None,
    limit: int | None = None,
    scorer: TagScorer | None = None,
) -> AsyncIterator[str]:
    """Yield distinct tags, ranked by closeness to query when one is given."""
    if query is None or not query.strip():
        stmt = select(Signal.tag).distinct().order_by(Signal.tag)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        for tag in result.scalars():
            yield tag
        return

    result = await db.execute(select(Signal.tag).distinct())
    ranked = rank_tags(
        result.scalars(), query, scorer or SequenceMatcherScorer(), limit,
    )
    for tag in ranked:
        yield tag
