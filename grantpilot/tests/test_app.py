"""Tests for the session flow (Landing -> Wizard -> Processing -> Dashboard)."""

import asyncio

import pytest

from grantpilot.app import ANALYSIS_FAILED_MESSAGE, AppState, GrantPilotSession
from grantpilot.config import MISSING_API_KEY_MESSAGE, Config
from grantpilot.wizard import WizardStep

from .conftest import FakeMatcher


def _config(**overrides) -> Config:
    values = {"gemini_api_key": "test-key", "max_concurrency": 4}
    values.update(overrides)
    return Config(_env_file=None, **values)


def _session(matcher: FakeMatcher, catalog, **config) -> GrantPilotSession:
    return GrantPilotSession(_config(**config), catalog=catalog, matcher_factory=lambda _cfg: matcher)


def test_missing_credential_blocks_start(small_catalog):
    session = GrantPilotSession(_config(gemini_api_key=None), catalog=small_catalog)

    assert session.start() is False
    assert session.state is AppState.LANDING
    assert session.wizard is None
    assert session.notice == MISSING_API_KEY_MESSAGE

    # repeated attempts never leave the landing state
    session.start()
    assert session.state is AppState.LANDING


def test_start_enters_wizard(small_catalog):
    session = _session(FakeMatcher(), small_catalog)
    assert session.start() is True
    assert session.state is AppState.WIZARD
    assert session.wizard.step is WizardStep.BASICS
    assert session.notice is None


def test_default_catalog_is_bundled():
    from grantpilot.catalog import GRANT_CATALOG

    session = GrantPilotSession(_config())
    assert session.catalog == GRANT_CATALOG


@pytest.mark.asyncio
async def test_complete_wizard_shows_ranked_dashboard(tech_profile, small_catalog):
    matcher = FakeMatcher(scores={"A": 20, "B": 95, "C": 55, "D": 72})
    session = _session(matcher, small_catalog)
    session.start()

    assert await session.complete_wizard(tech_profile) is True

    assert session.state is AppState.DASHBOARD
    assert session.business_name == "Quantum Logic Inc."
    assert [r.grant.id for r in session.results] == ["B", "D", "C", "A"]
    assert matcher.closed is True


@pytest.mark.asyncio
async def test_per_grant_failure_still_shows_all_results(tech_profile, small_catalog):
    matcher = FakeMatcher(scores={"A": 80, "B": 64, "D": 91}, degrade={"C"})
    session = _session(matcher, small_catalog)
    session.start()

    assert await session.complete_wizard(tech_profile) is True

    assert len(session.results) == 4
    degraded = next(r for r in session.results if r.grant.id == "C")
    assert degraded.match_score == 0
    assert degraded.analysis.eligibility_status.value == "Ineligible"
    assert degraded.analysis.hard_disqualifiers
    assert [r.match_score for r in session.results] == [91, 80, 64, 0]


@pytest.mark.asyncio
async def test_batch_failure_returns_to_landing(tech_profile, small_catalog):
    session = _session(FakeMatcher(raises={"A"}), small_catalog)
    session.start()
    session.wizard.load_example(0)

    assert await session.complete_wizard(tech_profile) is False

    assert session.state is AppState.LANDING
    assert session.notice == ANALYSIS_FAILED_MESSAGE
    assert session.wizard is None
    assert session.results == []
    assert session.business_name == ""


@pytest.mark.asyncio
async def test_start_over_discards_in_flight_results(tech_profile, small_catalog):
    session = _session(FakeMatcher(delay=0.05), small_catalog)
    session.start()

    run = asyncio.create_task(session.complete_wizard(tech_profile))
    await asyncio.sleep(0.01)
    assert session.state is AppState.PROCESSING

    session.start_over()
    assert await run is False

    assert session.state is AppState.WIZARD
    assert session.results == []
    assert session.wizard.step is WizardStep.BASICS


@pytest.mark.asyncio
async def test_select_and_close_detail(tech_profile, small_catalog):
    session = _session(FakeMatcher(scores={"A": 10, "B": 20, "C": 30, "D": 40}), small_catalog)
    session.start()
    await session.complete_wizard(tech_profile)

    selected = session.select(0)
    assert selected.grant.id == "D"
    assert session.selected is selected

    session.close_detail()
    assert session.selected is None

    session.start_over()
    assert session.state is AppState.WIZARD
    assert session.selected is None
    assert session.results == []


def test_select_outside_dashboard(small_catalog):
    session = _session(FakeMatcher(), small_catalog)
    with pytest.raises(RuntimeError):
        session.select(0)
