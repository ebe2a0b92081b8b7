"""Custom exceptions for GrantPilot."""


class GrantPilotError(Exception):
    """Base class for all GrantPilot errors."""


class MissingCredentialError(GrantPilotError):
    """Raised when the matching service API key is not configured."""


class CatalogError(GrantPilotError):
    """Raised when the grant catalog cannot be loaded or is inconsistent."""


class MatchingError(GrantPilotError):
    """Raised when the matching service call fails or returns an unusable verdict.

    Callers normally never see this: analyze_grant_match turns it into a
    degraded AnalysisResult.
    """

    def __init__(self, grant_id: str, message: str):
        self.grant_id = grant_id
        super().__init__(f"[{grant_id}] {message}")


class WizardError(GrantPilotError):
    """Raised on invalid wizard usage (unknown field, bad value, unknown example)."""


class StepValidationError(WizardError):
    """Raised when Next is requested while the current step is incomplete."""

    def __init__(self, step, reasons: list[str]):
        self.step = step
        self.reasons = reasons
        super().__init__(f"Step '{step.title}' is incomplete: {'; '.join(reasons)}")
