"""Profile wizard: step state machine and canned example profiles."""

from .example_profiles import EXAMPLE_PROFILES, ExampleProfile, find_example
from .wizard import MIN_DESCRIPTION_LENGTH, STEP_VALIDATORS, ProfileDraft, ProfileWizard, WizardStep

__all__ = [
    "EXAMPLE_PROFILES",
    "ExampleProfile",
    "find_example",
    "MIN_DESCRIPTION_LENGTH",
    "STEP_VALIDATORS",
    "ProfileDraft",
    "ProfileWizard",
    "WizardStep",
]
