"""BusinessProfile - Applicant record collected by the profile wizard."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class Province(str, Enum):
    """Canadian provinces and territories."""

    AB = "Alberta"
    BC = "British Columbia"
    MB = "Manitoba"
    NB = "New Brunswick"
    NL = "Newfoundland and Labrador"
    NS = "Nova Scotia"
    ON = "Ontario"
    PE = "Prince Edward Island"
    QC = "Quebec"
    SK = "Saskatchewan"
    NT = "Northwest Territories"
    NU = "Nunavut"
    YT = "Yukon"


class Industry(str, Enum):
    """Industry sectors offered by the wizard."""

    TECH = "Technology & Software"
    MFG = "Manufacturing"
    AGRI = "Agriculture"
    RETAIL = "Retail & E-commerce"
    HEALTH = "Health & Life Sciences"
    GREEN = "Clean Tech & Energy"
    OTHER = "Other"


class BusinessProfile(BaseModel):
    """Completed business profile submitted for grant matching.

    Immutable once built; lives only in process memory.
    """

    model_config = ConfigDict(frozen=True)

    company_name: str = Field(..., min_length=1, description="Legal company name")
    industry: Industry = Field(..., description="Industry sector")
    province: Province = Field(..., description="Province or territory of operation")
    years_in_business: int = Field(..., ge=0, description="Years in business")
    employee_count: int = Field(..., ge=0, description="Full-time employees")
    annual_revenue: float = Field(..., ge=0, description="Annual revenue, last fiscal year (CAD)")
    is_incorporated: bool = Field(default=True, description="Federally or provincially incorporated")
    project_description: str = Field(..., description="Free-text project description")
    project_budget: float = Field(..., ge=0, description="Estimated project budget (CAD)")
