"""Configuration management for GrantPilot."""

from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from ..exceptions import MissingCredentialError


MISSING_API_KEY_MESSAGE = (
    "Please provide a valid API_KEY (or GEMINI_API_KEY) in the environment "
    "variables to run GrantPilot."
)


class Config(BaseSettings):
    """Application configuration from environment variables."""

    # Matching service credential; absence blocks the flow before the wizard starts
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    gemini_model: str = "gemini-3-flash-preview"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)

    # Fan-out width for the match orchestrator
    max_concurrency: int = Field(default=8, ge=1)
    # None disables the per-call timeout
    request_timeout_seconds: Optional[float] = None

    catalog_path: Optional[str] = None
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore"}

    @field_validator("gemini_api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)


def validate_config() -> Config:
    """Load and validate configuration from environment.

    Raises ValueError with a descriptive message naming every invalid setting.
    """
    try:
        return Config()
    except Exception as exc:
        errors = getattr(exc, "errors", None)
        if callable(errors):
            names = ", ".join(
                ".".join(str(part) for part in err.get("loc", ())) or "config"
                for err in errors()
            )
            raise ValueError(
                f"Invalid configuration value(s): {names}. "
                "Please check your .env file or environment."
            ) from exc
        raise


def load_config() -> Config:
    """Load configuration from environment (startup entry point)."""
    return validate_config()


def require_api_key(config: Config) -> str:
    """Return the matching service API key or raise MissingCredentialError."""
    if not config.has_api_key:
        raise MissingCredentialError(MISSING_API_KEY_MESSAGE)
    return config.gemini_api_key
