"""Shared Pydantic models for GrantPilot - contract between wizard, matcher and dashboard."""

from .business_profile import BusinessProfile, Industry, Province
from .grant import FundingType, Grant
from .analysis_result import AggregatedResult, AnalysisResult, EligibilityStatus

__all__ = [
    "BusinessProfile",
    "Industry",
    "Province",
    "FundingType",
    "Grant",
    "AggregatedResult",
    "AnalysisResult",
    "EligibilityStatus",
]
