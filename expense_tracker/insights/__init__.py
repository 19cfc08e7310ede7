"""Insight selection package."""

from expense_tracker.insights.selector import RULES, select_insights, suggested_daily_cap

__all__ = ["RULES", "select_insights", "suggested_daily_cap"]
