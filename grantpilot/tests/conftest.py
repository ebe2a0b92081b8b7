"""Pytest configuration and fixtures."""

import asyncio
import json

import pytest

from grantpilot.models import (
    AnalysisResult,
    BusinessProfile,
    EligibilityStatus,
    FundingType,
    Grant,
    Industry,
    Province,
)

GEMINI_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-3-flash-preview:generateContent"
)


def make_grant(grant_id: str, name: str = "", raw_criteria: str = "Be a Canadian business.") -> Grant:
    return Grant(
        id=grant_id,
        name=name or f"Program {grant_id}",
        agency="Test Agency",
        description="Test program",
        max_funding=50_000,
        funding_type=FundingType.GRANT,
        raw_criteria=raw_criteria,
    )


def make_analysis(grant_id: str, score: int, status: EligibilityStatus = EligibilityStatus.ELIGIBLE) -> AnalysisResult:
    return AnalysisResult(
        grant_id=grant_id,
        match_score=score,
        eligibility_status=status,
        hard_disqualifiers=[] if status is not EligibilityStatus.INELIGIBLE else ["Revenue below threshold"],
        suitability_reasoning=f"Scored {score} for {grant_id}.",
        required_documents=["Articles of Incorporation"],
        citation="Be a Canadian business.",
    )


def gemini_body(verdict) -> dict:
    """Wrap a verdict (dict or raw text) in a generateContent response body."""
    text = verdict if isinstance(verdict, str) else json.dumps(verdict)
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


class FakeMatcher:
    """In-memory replacement for GeminiMatchingClient.

    scores maps grant id -> score; ids in `raises` raise instead of returning,
    ids in `degrade` return the degraded result.
    """

    def __init__(self, scores=None, raises=(), degrade=(), delay: float = 0.0):
        self.scores = scores or {}
        self.raises = set(raises)
        self.degrade = set(degrade)
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def analyze_grant_match(self, profile, grant):
        self.calls.append(grant.id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if grant.id in self.raises:
                raise RuntimeError(f"unhandled failure for {grant.id}")
            if grant.id in self.degrade:
                return AnalysisResult.degraded(grant.id)
            return make_analysis(grant.id, self.scores.get(grant.id, 50))
        finally:
            self.in_flight -= 1


@pytest.fixture
def retail_profile():
    """New retail business with no meaningful revenue."""
    return BusinessProfile(
        company_name="Jenny's Boutique",
        industry=Industry.RETAIL,
        province=Province.AB,
        years_in_business=0,
        employee_count=1,
        annual_revenue=25_000,
        is_incorporated=False,
        project_description="Inventory for my new clothing store and a local radio advertisement.",
        project_budget=5_000,
    )


@pytest.fixture
def tech_profile():
    return BusinessProfile(
        company_name="Quantum Logic Inc.",
        industry=Industry.TECH,
        province=Province.ON,
        years_in_business=4,
        employee_count=12,
        annual_revenue=850_000,
        is_incorporated=True,
        project_description="R&D on a machine learning algorithm for logistics optimization.",
        project_budget=150_000,
    )


@pytest.fixture
def small_catalog():
    return (make_grant("A"), make_grant("B"), make_grant("C"), make_grant("D"))


@pytest.fixture
def eligible_verdict():
    return {
        "matchScore": 86,
        "eligibilityStatus": "Eligible",
        "hardDisqualifiers": [],
        "suitabilityReasoning": "The R&D project fits the program's intent.",
        "requiredDocuments": ["Articles of Incorporation", "T2 Schedule 100/125"],
        "citation": "Must conduct Scientific Research and Experimental Development.",
    }
