"""Prompt template and response schema for grant eligibility matching.

The model is asked to:
1. Check hard disqualifiers first
2. Force score < 20 and status "Ineligible" when disqualified
3. Otherwise assess project suitability
4. Propose a document checklist
5. Cite the criteria text it relied on
6. Not invent criteria absent from the supplied text
"""

from ..models import BusinessProfile, EligibilityStatus, Grant


MATCH_PROMPT = """You are a Senior Grant Adjudicator for the Canadian Government.

Evaluate the following BUSINESS PROFILE against the GRANT CRITERIA.

BUSINESS PROFILE:
- Name: {company_name}
- Location: {province}
- Years in Business: {years_in_business}
- Employees: {employee_count}
- Annual Revenue: ${annual_revenue:,.0f}
- Incorporated: {is_incorporated}
- Industry: {industry}
- Project: {project_description}
- Budget: ${project_budget:,.0f}

GRANT CRITERIA (Source of Truth):
{raw_criteria}

INSTRUCTIONS:
1. Check for HARD DISQUALIFIERS first. Examples: revenue thresholds, incorporation status, location restrictions, excluded industries.
2. If hard disqualifiers exist, set score < 20 and status "Ineligible".
3. If eligible, assess SUITABILITY. Does the project description match the grant's intent?
4. Generate a specific checklist of documents based on standard Canadian grant requirements (e.g. if incorporated, ask for Articles of Incorporation; if financials are mentioned, ask for T2 Schedule 100/125).
5. In "citation", quote the specific text from the GRANT CRITERIA that your decision relies on.
6. Be strict but fair. Do not hallucinate criteria not present in the text or standard Canadian business context."""


# OpenAPI-subset schema accepted by generateContent's responseSchema
ANALYSIS_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "matchScore": {
            "type": "NUMBER",
            "description": "A score from 0 to 100 indicating suitability.",
        },
        "eligibilityStatus": {
            "type": "STRING",
            "enum": [status.value for status in EligibilityStatus],
        },
        "hardDisqualifiers": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": (
                "List of specific reasons why the applicant is ineligible based on hard rules "
                "(revenue, age, location)."
            ),
        },
        "suitabilityReasoning": {
            "type": "STRING",
            "description": "Explanation of why the project aligns (or doesn't) with the grant goals.",
        },
        "requiredDocuments": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "A specific list of documents likely needed based on the grant criteria.",
        },
        "citation": {
            "type": "STRING",
            "description": "The specific text from the provided criteria used to make the decision.",
        },
    },
    "required": [
        "matchScore",
        "eligibilityStatus",
        "hardDisqualifiers",
        "suitabilityReasoning",
        "requiredDocuments",
        "citation",
    ],
}


def build_match_prompt(profile: BusinessProfile, grant: Grant) -> str:
    """Render the adjudication prompt for one profile/grant pair."""
    return MATCH_PROMPT.format(
        company_name=profile.company_name,
        province=profile.province.value,
        years_in_business=profile.years_in_business,
        employee_count=profile.employee_count,
        annual_revenue=profile.annual_revenue,
        is_incorporated="Yes" if profile.is_incorporated else "No",
        industry=profile.industry.value,
        project_description=profile.project_description,
        project_budget=profile.project_budget,
        raw_criteria=grant.raw_criteria.strip(),
    )
