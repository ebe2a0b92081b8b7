"""Grant matching: prompt, model client and orchestrator."""

from .client import GeminiMatchingClient, MatchVerdict
from .orchestrator import (
    DEFAULT_MAX_CONCURRENCY,
    HIGH_POTENTIAL_THRESHOLD,
    GrantMatcher,
    count_high_potential,
    match_grants,
)
from .prompts import ANALYSIS_RESPONSE_SCHEMA, build_match_prompt

__all__ = [
    "GeminiMatchingClient",
    "MatchVerdict",
    "DEFAULT_MAX_CONCURRENCY",
    "HIGH_POTENTIAL_THRESHOLD",
    "GrantMatcher",
    "count_high_potential",
    "match_grants",
    "ANALYSIS_RESPONSE_SCHEMA",
    "build_match_prompt",
]
