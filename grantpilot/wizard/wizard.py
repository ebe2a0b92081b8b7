"""Four-step profile wizard.

Steps are named states (Basics -> Location -> Financials -> Project). Each
state has a validation predicate that gates Next; Back is never gated. Next on
the Project step is the terminal transition: it builds the BusinessProfile and
hands it to the completion callback instead of advancing.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import StepValidationError, WizardError
from ..models import BusinessProfile, Industry, Province
from .example_profiles import find_example

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 20


class WizardStep(Enum):
    BASICS = 1
    LOCATION = 2
    FINANCIALS = 3
    PROJECT = 4

    @property
    def number(self) -> int:
        return self.value

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @property
    def is_first(self) -> bool:
        return self is WizardStep.BASICS

    @property
    def is_last(self) -> bool:
        return self is WizardStep.PROJECT


def _coerce_enum(enum_cls, value):
    """Accept an enum member, its display value, or its member name."""
    if value is None or value == "" or isinstance(value, enum_cls):
        return value or None
    if isinstance(value, str):
        for member in enum_cls:
            if value == member.value or value.upper() == member.name:
                return member
    return value


class ProfileDraft(BaseModel):
    """Partially filled profile edited across wizard steps."""

    model_config = ConfigDict(validate_assignment=True)

    company_name: Optional[str] = None
    industry: Optional[Industry] = None
    province: Optional[Province] = None
    years_in_business: Optional[int] = 1
    employee_count: Optional[int] = 1
    annual_revenue: Optional[float] = 0
    is_incorporated: bool = True
    project_description: Optional[str] = None
    project_budget: Optional[float] = 10_000

    @field_validator("industry", mode="before")
    @classmethod
    def coerce_industry(cls, v):
        return _coerce_enum(Industry, v)

    @field_validator("province", mode="before")
    @classmethod
    def coerce_province(cls, v):
        return _coerce_enum(Province, v)


def _basics_missing(draft: ProfileDraft) -> list[str]:
    missing = []
    if not draft.company_name:
        missing.append("company name is required")
    if draft.industry is None:
        missing.append("industry must be selected")
    return missing


def _location_missing(draft: ProfileDraft) -> list[str]:
    if draft.province is None:
        return ["province or territory must be selected"]
    return []


def _financials_missing(draft: ProfileDraft) -> list[str]:
    if draft.annual_revenue is None or draft.annual_revenue < 0:
        return ["annual revenue must be zero or more"]
    return []


def _project_missing(draft: ProfileDraft) -> list[str]:
    description = draft.project_description or ""
    if len(description) <= MIN_DESCRIPTION_LENGTH:
        return [f"project description must be longer than {MIN_DESCRIPTION_LENGTH} characters"]
    return []


STEP_VALIDATORS: dict[WizardStep, Callable[[ProfileDraft], list[str]]] = {
    WizardStep.BASICS: _basics_missing,
    WizardStep.LOCATION: _location_missing,
    WizardStep.FINANCIALS: _financials_missing,
    WizardStep.PROJECT: _project_missing,
}


class ProfileWizard:
    """Linear wizard collecting a BusinessProfile.

    No network calls originate here; all side effects are local state changes
    plus the optional on_complete callback.
    """

    def __init__(self, on_complete: Optional[Callable[[BusinessProfile], None]] = None):
        self.on_complete = on_complete
        self.step = WizardStep.BASICS
        self.draft = ProfileDraft()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def update(self, **fields) -> None:
        """Set draft fields. Unknown names or untypeable values raise WizardError."""
        for name, value in fields.items():
            if name not in ProfileDraft.model_fields:
                raise WizardError(f"Unknown profile field: {name}")
            try:
                setattr(self.draft, name, value)
            except ValidationError as exc:
                raise WizardError(f"Invalid value for {name}: {value!r}") from exc

    def load_example(self, key: int | str) -> None:
        """Replace the whole draft with a canned example and return to Basics for review."""
        try:
            example = find_example(key)
        except KeyError as exc:
            raise WizardError(str(exc.args[0])) from exc
        self.draft = ProfileDraft(**example.data)
        self.step = WizardStep.BASICS
        logger.debug("Loaded example profile '%s'", example.label)

    def reset(self) -> None:
        self.draft = ProfileDraft()
        self.step = WizardStep.BASICS

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def missing_requirements(self, step: Optional[WizardStep] = None) -> list[str]:
        """Reasons the given (default: current) step cannot advance."""
        return STEP_VALIDATORS[step or self.step](self.draft)

    @property
    def can_advance(self) -> bool:
        return not self.missing_requirements()

    @property
    def can_go_back(self) -> bool:
        return not self.step.is_first

    def next(self) -> Optional[BusinessProfile]:
        """Advance one step, or complete the wizard on the Project step.

        Returns:
            The completed BusinessProfile on the terminal transition, else None

        Raises:
            StepValidationError: If the current step's predicate is false
        """
        missing = self.missing_requirements()
        if missing:
            raise StepValidationError(self.step, missing)

        if not self.step.is_last:
            self.step = WizardStep(self.step.number + 1)
            return None

        profile = self._build_profile()
        logger.info("Wizard completed for %s", profile.company_name)
        if self.on_complete is not None:
            self.on_complete(profile)
        return profile

    def back(self) -> WizardStep:
        if not self.step.is_first:
            self.step = WizardStep(self.step.number - 1)
        return self.step

    def _build_profile(self) -> BusinessProfile:
        # Earlier steps may have been edited after they were passed
        for step in WizardStep:
            missing = self.missing_requirements(step)
            if missing:
                self.step = step
                raise StepValidationError(step, missing)
        try:
            return BusinessProfile(**self.draft.model_dump())
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
            raise WizardError(f"Profile has invalid values: {fields}") from exc
