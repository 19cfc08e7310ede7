"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All thresholds live here as named values.
The health tiers, alert banners and insights all read the same numbers,
and tests can exercise the boundaries without guessing literals.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ThresholdSettings(BaseSettings):
    """Budget health thresholds, in percent of budget used."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_THRESHOLD_",
        extra="ignore",
        frozen=True,
    )

    warning_percent: Decimal = Field(
        default=Decimal("70"),
        gt=0,
        description="Percent used at which spending needs watching"
    )
    critical_percent: Decimal = Field(
        default=Decimal("90"),
        gt=0,
        description="Percent used at which the budget is almost gone"
    )
    exceeded_percent: Decimal = Field(
        default=Decimal("100"),
        gt=0,
        description="Percent used at which the budget is exceeded"
    )

    # The projection is a fixed window, not the real month length
    projection_window_days: int = Field(
        default=30,
        ge=1,
        le=31,
        description="Days used to extrapolate the burn rate to month end"
    )

    @model_validator(mode='after')
    def validate_order(self) -> 'ThresholdSettings':
        """Thresholds must be strictly increasing (critical may equal exceeded)."""
        if not self.warning_percent < self.critical_percent:
            raise ValueError("warning_percent must be below critical_percent")
        if not self.critical_percent <= self.exceeded_percent:
            raise ValueError("critical_percent cannot be above exceeded_percent")
        return self


class DisplaySettings(BaseSettings):
    """How amounts and dates are rendered for the presentation layer."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_DISPLAY_",
        extra="ignore",
        frozen=True,
    )

    currency_symbol: str = Field(
        default="₹",
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )
    digit_grouping: Literal["indian", "international"] = Field(
        default="indian",
        description="Thousands grouping style (indian: 1,00,000.00)"
    )
    date_format: str = Field(
        default="%d/%m/%Y",
        description="strftime pattern for displayed dates"
    )

    @field_validator('date_format')
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        if "%" not in v:
            raise ValueError(f"Date format has no directives: {v!r}")
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

    # Logging
    audit_enabled: bool = Field(
        default=True,
        description="Emit audit events for dashboard builds"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )


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
    def thresholds(self) -> ThresholdSettings:
        return ThresholdSettings()

    @property
    def display(self) -> DisplaySettings:
        return DisplaySettings()

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

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for each failing section.
    """
    results = {}

    settings = get_settings()

    for name in ("thresholds", "display", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
