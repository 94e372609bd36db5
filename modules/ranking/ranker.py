"""
Ranking & Tie-Break Engine
==========================
Orders scored webpages by relevance, breaks ties among high-relevance pages
by site authority and truncates to the requested result count.

Two truncation policies exist:

- PRECISION: only pages at or above HIGH_RELEVANCE_THRESHOLD are returned,
  so an exact match is never buried under weaker results. A query with no
  high-relevance page returns nothing.
- MINIMUM_RESULTS: up to ``max_results`` pages are returned even below the
  threshold; high-relevance pages still come first in tie-break order.
"""

import logging
from enum import Enum
from typing import List, Sequence

from modules.ranking.authority import SiteAuthorityTable
from modules.types import ScoredDocument

logger = logging.getLogger(__name__)

HIGH_RELEVANCE_THRESHOLD = 1.0

# Cosine similarity of parallel vectors can land at 0.9999999999999998.
SCORE_TOLERANCE = 1e-9


class RankingPolicy(str, Enum):
    """Named truncation policy for the ranked result list."""
    PRECISION = "precision"
    MINIMUM_RESULTS = "minimum_results"

    @classmethod
    def parse(cls, value: str) -> "RankingPolicy":
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid ranking policy: {value!r}. Must be one of: {valid}")


def is_high_relevance(score: float) -> bool:
    return score >= HIGH_RELEVANCE_THRESHOLD - SCORE_TOLERANCE


def rank_documents(
    scored: Sequence[ScoredDocument],
    max_results: int,
    authority: SiteAuthorityTable,
    policy: RankingPolicy = RankingPolicy.PRECISION,
) -> List[ScoredDocument]:
    """
    Sort, tie-break and truncate scored webpages.

    Args:
        scored: Every scored candidate for the request
        max_results: Caller-bounded maximum number of results
        authority: Site authority table for the tie-break
        policy: Truncation policy

    Returns:
        Ranked, truncated list of ScoredDocument objects
    """
    # Equal scores at any level fall back to authority rank; high-relevance
    # pages always form the prefix.
    ranked = sorted(
        scored,
        key=lambda item: (
            not is_high_relevance(item.score),
            -round(item.score, 9),
            authority.sort_key(item.document.url),
        ),
    )

    high_count = 0
    for item in ranked:
        if not is_high_relevance(item.score):
            break
        high_count += 1

    limit = max(0, max_results)
    if policy is RankingPolicy.PRECISION:
        keep = min(high_count, limit)
    else:
        keep = min(len(ranked), limit)

    logger.debug(
        f"[RANKING] policy={policy.value} candidates={len(ranked)} "
        f"high_relevance={high_count} returned={keep}"
    )
    return ranked[:keep]
