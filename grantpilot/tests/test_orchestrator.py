"""Tests for the match orchestrator: fan-out, join and ranking."""

import pytest

from grantpilot.catalog import GRANT_CATALOG
from grantpilot.matcher import count_high_potential, match_grants
from grantpilot.models import EligibilityStatus

from .conftest import FakeMatcher, make_grant


@pytest.mark.asyncio
async def test_one_result_per_grant_sorted_descending(tech_profile, small_catalog):
    matcher = FakeMatcher(scores={"A": 40, "B": 90, "C": 10, "D": 75})

    results = await match_grants(tech_profile, small_catalog, matcher)

    assert len(results) == len(small_catalog)
    assert [r.grant.id for r in results] == ["B", "D", "A", "C"]
    assert all(a.match_score >= b.match_score for a, b in zip(results, results[1:]))
    assert sorted(matcher.calls) == ["A", "B", "C", "D"]


@pytest.mark.asyncio
async def test_ties_keep_catalog_order(tech_profile):
    catalog = [make_grant(gid) for gid in ("first", "second", "third", "fourth")]
    matcher = FakeMatcher(scores={"first": 50, "second": 80, "third": 50, "fourth": 50})

    results = await match_grants(tech_profile, catalog, matcher)

    assert [r.grant.id for r in results] == ["second", "first", "third", "fourth"]


@pytest.mark.asyncio
async def test_results_pair_grant_with_its_analysis(tech_profile, small_catalog):
    results = await match_grants(tech_profile, small_catalog, FakeMatcher())
    for result in results:
        assert result.analysis.grant_id == result.grant.id


@pytest.mark.asyncio
async def test_degraded_result_participates_in_ranking(tech_profile, small_catalog):
    matcher = FakeMatcher(scores={"A": 60, "B": 85, "D": 30}, degrade={"C"})

    results = await match_grants(tech_profile, small_catalog, matcher)

    assert len(results) == 4
    last = results[-1]
    assert last.grant.id == "C"
    assert last.match_score == 0
    assert last.analysis.eligibility_status is EligibilityStatus.INELIGIBLE
    assert last.analysis.hard_disqualifiers
    assert [r.match_score for r in results[:3]] == [85, 60, 30]


@pytest.mark.asyncio
async def test_unhandled_error_aborts_batch(tech_profile, small_catalog):
    matcher = FakeMatcher(raises={"B"})
    with pytest.raises(RuntimeError, match="unhandled failure for B"):
        await match_grants(tech_profile, small_catalog, matcher)


@pytest.mark.asyncio
async def test_fan_out_is_bounded(tech_profile):
    catalog = [make_grant(f"G{i}") for i in range(12)]
    matcher = FakeMatcher(delay=0.01)

    results = await match_grants(tech_profile, catalog, matcher, max_concurrency=3)

    assert len(results) == 12
    assert matcher.max_in_flight == 3


@pytest.mark.asyncio
async def test_small_catalog_runs_fully_concurrent(tech_profile):
    matcher = FakeMatcher(delay=0.01)
    await match_grants(tech_profile, GRANT_CATALOG, matcher, max_concurrency=8)
    assert matcher.max_in_flight == len(GRANT_CATALOG)


@pytest.mark.asyncio
async def test_invalid_concurrency(tech_profile, small_catalog):
    with pytest.raises(ValueError):
        await match_grants(tech_profile, small_catalog, FakeMatcher(), max_concurrency=0)


@pytest.mark.asyncio
async def test_count_high_potential(tech_profile, small_catalog):
    matcher = FakeMatcher(scores={"A": 70, "B": 71, "C": 100, "D": 0})
    results = await match_grants(tech_profile, small_catalog, matcher)
    # threshold is strictly greater than 70
    assert count_high_potential(results) == 2
