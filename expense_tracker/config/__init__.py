"""Configuration package."""

from expense_tracker.config.settings import (
    AppSettings,
    DisplaySettings,
    Settings,
    ThresholdSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "DisplaySettings",
    "Settings",
    "ThresholdSettings",
    "get_settings",
    "validate_all_settings",
]
