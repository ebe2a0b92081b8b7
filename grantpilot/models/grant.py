"""Grant - Static funding program record from the catalog."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class FundingType(str, Enum):
    GRANT = "Grant"
    LOAN = "Loan"
    TAX_CREDIT = "Tax Credit"


class Grant(BaseModel):
    """Government funding program with its published eligibility rules.

    raw_criteria is the authoritative rule text handed to the matching model.
    """

    id: str = Field(..., min_length=1, description="Unique program identifier")
    name: str = Field(..., description="Display name")
    agency: str = Field(..., description="Issuing agency")
    description: str = Field(..., description="Short description")
    max_funding: float = Field(..., ge=0, description="Maximum funding amount (CAD)")
    funding_type: FundingType = Field(..., description="Grant, Loan or Tax Credit")
    raw_criteria: str = Field(..., description="Eligibility criteria text (source of truth)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "CANEXPORT-SME",
                "name": "CanExport SMEs",
                "agency": "Trade Commissioner Service",
                "description": "Funding to help Canadian businesses develop new export markets.",
                "max_funding": 50000.0,
                "funding_type": "Grant",
                "raw_criteria": "Eligibility Criteria:\n- Be a for-profit company.\n...",
            }
        },
    )
