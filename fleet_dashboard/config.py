from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "INFO"

    # State persistence
    state_backend: Literal["memory", "json"] = "json"
    state_file: str = "state/dashboard_state.json"
    seed_sample_data: bool = True

    # Inventory view
    default_time_frame: str = "week"
    lead_time_unit: Literal["weeks", "months"] = "weeks"

    # Stock status thresholds, in weeks until empty
    critical_weeks: float = 2.0
    critical_inclusive: bool = True
    low_weeks: float = 4.0
    medium_weeks: float = 8.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
