"""Canned example profiles for quick-filling the wizard."""

from dataclasses import dataclass, field

from ..models import Industry, Province


@dataclass(frozen=True)
class ExampleProfile:
    """A labelled set of wizard field values."""

    label: str
    data: dict = field(default_factory=dict)


EXAMPLE_PROFILES: tuple[ExampleProfile, ...] = (
    ExampleProfile(
        label="Tech Scale-Up (High Match)",
        data={
            "company_name": "Quantum Logic Inc.",
            "industry": Industry.TECH,
            "province": Province.ON,
            "years_in_business": 4,
            "employee_count": 12,
            "annual_revenue": 850_000,
            "is_incorporated": True,
            "project_description": (
                "We are conducting R&D to develop a new proprietary machine learning algorithm "
                "for logistics optimization. We also need to digitize our internal CRM systems."
            ),
            "project_budget": 150_000,
        },
    ),
    ExampleProfile(
        label="BC Manufacturer (Export)",
        data={
            "company_name": "Pacific Woodworks Ltd.",
            "industry": Industry.MFG,
            "province": Province.BC,
            "years_in_business": 8,
            "employee_count": 45,
            "annual_revenue": 5_200_000,
            "is_incorporated": True,
            "project_description": (
                "We want to expand our sales to the German market by attending the Munich Trade Fair. "
                "We need to translate our marketing materials and protect our IP in Europe."
            ),
            "project_budget": 60_000,
        },
    ),
    ExampleProfile(
        label="New Retail (Low Match)",
        data={
            "company_name": "Jenny's Boutique",
            "industry": Industry.RETAIL,
            "province": Province.AB,
            "years_in_business": 0,
            "employee_count": 1,
            "annual_revenue": 25_000,
            "is_incorporated": False,
            "project_description": (
                "I need funding to buy inventory for my new clothing store and pay for a local "
                "radio advertisement to get more customers."
            ),
            "project_budget": 5_000,
        },
    ),
)


def find_example(key: int | str) -> ExampleProfile:
    """Return an example by position or by (case-insensitive) label."""
    if isinstance(key, int):
        if not 0 <= key < len(EXAMPLE_PROFILES):
            raise KeyError(f"No example profile at index {key}")
        return EXAMPLE_PROFILES[key]
    for example in EXAMPLE_PROFILES:
        if example.label.lower() == key.strip().lower():
            return example
    raise KeyError(f"No example profile labelled '{key}'")
