"""AnalysisResult / AggregatedResult - Per-grant eligibility verdicts."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from .grant import Grant


SYSTEM_ERROR_DISQUALIFIER = "System error during analysis. Please try again later."
SYSTEM_ERROR_REASONING = "Unable to process due to technical error."


class EligibilityStatus(str, Enum):
    ELIGIBLE = "Eligible"
    INELIGIBLE = "Ineligible"
    CONDITIONAL = "Conditional"


class AnalysisResult(BaseModel):
    """Eligibility verdict for one grant, as returned by the matching model.

    Produced once per grant per wizard completion; never cached.
    """

    model_config = ConfigDict(frozen=True)

    grant_id: str = Field(..., description="Links to Grant.id")
    match_score: int = Field(..., ge=0, le=100, description="Suitability score 0-100")
    eligibility_status: EligibilityStatus = Field(..., description="Eligible, Ineligible or Conditional")
    hard_disqualifiers: list[str] = Field(default_factory=list, description="Hard rule violations")
    suitability_reasoning: str = Field(..., description="Why the project does or does not fit")
    required_documents: list[str] = Field(default_factory=list, description="Document checklist")
    citation: str = Field(..., description="Excerpt of the grant criteria used for the decision")

    @classmethod
    def degraded(cls, grant_id: str) -> "AnalysisResult":
        """Result used when a grant could not be analyzed.

        Scores 0 and sorts to the bottom, but still appears in the results.
        """
        return cls(
            grant_id=grant_id,
            match_score=0,
            eligibility_status=EligibilityStatus.INELIGIBLE,
            hard_disqualifiers=[SYSTEM_ERROR_DISQUALIFIER],
            suitability_reasoning=SYSTEM_ERROR_REASONING,
            required_documents=[],
            citation="N/A",
        )

    @property
    def is_degraded(self) -> bool:
        return self.hard_disqualifiers == [SYSTEM_ERROR_DISQUALIFIER] and self.citation == "N/A"


class AggregatedResult(BaseModel):
    """A catalog grant paired with its analysis; the unit the dashboard renders."""

    model_config = ConfigDict(frozen=True)

    grant: Grant
    analysis: AnalysisResult

    @property
    def match_score(self) -> int:
        return self.analysis.match_score
