"""
Configuration Management for the Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SummarizerSettings(BaseSettings):
    """Summarization endpoint configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUMMARIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    api_url: str = Field(
        ...,
        description="URL the expense text is POSTed to"
    )
    api_key: str = Field(
        ...,
        description="Bearer credential for the summarization endpoint"
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Request timeout"
    )
    # 1 means a single attempt, no retry
    max_attempts: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Attempts on network errors"
    )

    @field_validator('api_url')
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Only http(s) endpoints make sense here."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Summarizer URL must start with http:// or https://, got {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        min_length=1,
        max_length=5,
        description="Currency symbol used in the summary text and the UI"
    )

    # Validation thresholds
    max_expense_amount: float = Field(
        default=1000000.0,
        gt=0,
        description="Maximum reasonable expense amount (for sanity checking)"
    )
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future an expense date can be"
    )

    # Activity trail
    audit_history_size: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="How many recent audit events to keep in memory"
    )

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug_mode else "INFO"


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Loaded lazily so the app runs without a summarizer configured

    @property
    def summarizer(self) -> SummarizerSettings:
        return SummarizerSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.summarizer
        results["summarizer"] = True
    except Exception as e:
        results["summarizer"] = False
        results["summarizer_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
