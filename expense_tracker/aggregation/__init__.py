"""Expense aggregation package."""

from expense_tracker.aggregation.engine import (
    CategoryLookup,
    active_days,
    aggregate,
    average_daily_spend,
    category_lookup,
    sort_recent_first,
    top_category,
)

__all__ = [
    "CategoryLookup",
    "active_days",
    "aggregate",
    "average_daily_spend",
    "category_lookup",
    "sort_recent_first",
    "top_category",
]
