"""Tag Ranking: approximate-match ordering for tag search.

Invariants:
    - Pure functions: no IO, no async, no DB
    - Higher score = closer match; ties broken lexicographically by tag
    - No query means plain lexicographic order
    - Ranking never drops tags: a poor match sorts last, it does not vanish

Design Decisions:
    - TagScorer is a Protocol: any scorer with score(query, candidate) -> float
      in [0, 1] can replace the default
    - Default scorer uses difflib.SequenceMatcher ratio, boosted for substring
      and prefix hits so partial input ("time tr") still surfaces "time travel"
    - Case-insensitive comparison; the returned tags keep their stored spelling
"""

from collections.abc import Iterable
from difflib import SequenceMatcher
from typing import Protocol


class TagScorer(Protocol):
    """Similarity between a search query and a candidate tag."""
    def score(self, query: str, candidate: str) -> float: ...


class SequenceMatcherScorer:
    """Edit-similarity scorer with substring and prefix boosts."""

    _PREFIX_BONUS = 0.1

    def score(self, query: str, candidate: str) -> float:
        q = query.strip().casefold()
        c = candidate.casefold()
        if not q:
            return 0.0
        if q == c:
            return 1.0
        ratio = SequenceMatcher(None, q, c).ratio()
        if q in c:
            # substring hits rank above any typo-level match
            coverage = len(q) / len(c)
            ratio = max(ratio, 0.5 + 0.4 * coverage)
            if c.startswith(q):
                ratio += self._PREFIX_BONUS
        return min(ratio, 0.99)


def rank_tags(
    tags: Iterable[str],
    query: str | None,
    scorer: TagScorer,
    limit: int | None = None,
) -> list[str]:
    """Order tags by closeness to query (or lexicographically), capped at limit."""
    if query is None or not query.strip():
        ranked = sorted(tags)
    else:
        scored = [(scorer.score(query, tag), tag) for tag in tags]
        scored.sort(key=lambda pair: (-pair[0], pair[1]))
        ranked = [tag for _, tag in scored]
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
