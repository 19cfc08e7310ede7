"""Metric primitives package."""

from expense_tracker.metrics.primitives import (
    InvalidConfigurationError,
    burn_rate,
    days_in_month,
    format_currency,
    format_date,
    health_tier,
    percent_of,
    whole_percent,
    to_decimal,
)

__all__ = [
    "InvalidConfigurationError",
    "burn_rate",
    "days_in_month",
    "format_currency",
    "format_date",
    "health_tier",
    "percent_of",
    "whole_percent",
    "to_decimal",
]
