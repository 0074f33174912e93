"""
Configuration Management for the Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Thresholds, page sizes and storage keys live in one place instead of
being scattered as module constants, so tests and embedders can
override them through the environment or a .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".finance_tracker",
        description="Directory holding one JSON document per storage key"
    )
    key_prefix: str = Field(
        default="pfd_",
        description="Namespace prefix applied to every storage key"
    )

    @field_validator('key_prefix')
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        """Keys become file names, so keep the prefix filesystem-safe."""
        if any(sep in v for sep in ("/", "\\")):
            raise ValueError("Storage key prefix cannot contain path separators")
        return v

    @property
    def transactions_key(self) -> str:
        return f"{self.key_prefix}transactions"

    @property
    def budgets_key(self) -> str:
        return f"{self.key_prefix}budgets"

    @property
    def savings_goals_key(self) -> str:
        return f"{self.key_prefix}savings_goals"

    @property
    def settings_key(self) -> str:
        return f"{self.key_prefix}settings"


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        description="Symbol prefixed to formatted amounts"
    )

    # Listing
    items_per_page: int = Field(
        default=10,
        ge=1,
        le=500,
        description="Default page size for transaction listings"
    )
    recent_transactions_limit: int = Field(
        default=5,
        ge=1,
        description="How many transactions the dashboard shows as recent"
    )
    expense_breakdown_limit: int = Field(
        default=8,
        ge=1,
        description="How many categories the expense breakdown keeps"
    )
    trend_months: int = Field(
        default=6,
        ge=1,
        le=60,
        description="Number of trailing months in the monthly trend"
    )

    # Budget alert thresholds (fractions of the budget amount)
    budget_warning_threshold: float = Field(
        default=0.8,
        gt=0.0,
        description="Spent fraction at which a budget turns to warning"
    )
    budget_danger_threshold: float = Field(
        default=1.0,
        gt=0.0,
        description="Spent fraction at which a budget turns to danger"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


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

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

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
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
