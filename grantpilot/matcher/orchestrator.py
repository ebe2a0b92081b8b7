"""Fan-out of one matching request per catalog grant, joined and ranked."""

import asyncio
import logging
import time
from typing import Iterable, Protocol

from ..models import AggregatedResult, AnalysisResult, BusinessProfile, Grant

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8
HIGH_POTENTIAL_THRESHOLD = 70


class GrantMatcher(Protocol):
    async def analyze_grant_match(self, profile: BusinessProfile, grant: Grant) -> AnalysisResult:
        ...


async def match_grants(
    profile: BusinessProfile,
    catalog: Iterable[Grant],
    matcher: GrantMatcher,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[AggregatedResult]:
    """Match a profile against every grant and rank the outcomes.

    At most max_concurrency requests are in flight. The matcher is expected to
    convert its own failures into degraded results; anything it raises aborts
    the whole batch.

    Returns:
        One AggregatedResult per grant, sorted by descending match score with
        ties kept in catalog order
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

    grants = list(catalog)
    semaphore = asyncio.Semaphore(max_concurrency)
    start = time.monotonic()

    async def match_one(grant: Grant) -> AggregatedResult:
        async with semaphore:
            analysis = await matcher.analyze_grant_match(profile, grant)
        return AggregatedResult(grant=grant, analysis=analysis)

    logger.info(
        "Matching %s against %d grants (max_concurrency=%d)",
        profile.company_name,
        len(grants),
        max_concurrency,
    )
    outcomes = await asyncio.gather(*(match_one(grant) for grant in grants))

    # sorted() is stable, so equal scores keep catalog order
    ranked = sorted(outcomes, key=lambda result: result.match_score, reverse=True)

    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "match_complete grants=%d high_potential=%d degraded=%d duration_ms=%.0f",
        len(ranked),
        count_high_potential(ranked),
        sum(1 for result in ranked if result.analysis.is_degraded),
        duration_ms,
    )
    return ranked


def count_high_potential(results: Iterable[AggregatedResult]) -> int:
    """Number of results scoring above the high-potential threshold."""
    return sum(1 for result in results if result.match_score > HIGH_POTENTIAL_THRESHOLD)
