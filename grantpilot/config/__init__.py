"""Environment configuration."""

from .config import Config, MISSING_API_KEY_MESSAGE, load_config, require_api_key, validate_config

__all__ = ["Config", "MISSING_API_KEY_MESSAGE", "load_config", "require_api_key", "validate_config"]
