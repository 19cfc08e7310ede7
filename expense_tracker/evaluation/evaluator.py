"""
Budget Evaluator

Combines a period's spending with its budget: what's left, how fast
money is going, where the month will end up, and whether to raise
a banner.

IMPORTANT: A budget of zero or less is a configuration error.
We raise instead of returning a 0% or infinite percent_used, so a
dashboard can never show a healthy-looking number for a missing budget.
"""

from typing import Optional

from expense_tracker.config import ThresholdSettings, get_settings
from expense_tracker.metrics.primitives import (
    ZERO,
    InvalidConfigurationError,
    Number,
    burn_rate,
    format_currency,
    health_tier,
    percent_of,
    to_decimal,
    whole_percent,
)
from expense_tracker.models.metrics import AlertLevel, BudgetAlert, BudgetMetrics


def evaluate(
    spent: Number,
    budget: Number,
    days_elapsed: int,
    days_in_period: Optional[int] = None,
    thresholds: Optional[ThresholdSettings] = None,
) -> BudgetMetrics:
    """
    Evaluate spending against a budget.

    The month-end projection is burn rate times a fixed window
    (30 days by default), not the actual month length.

    Args:
        spent: Total spent so far in the period
        budget: Budget for the period, must be > 0
        days_elapsed: Days of the period reached so far
        days_in_period: Length of the period; used for days_remaining
        thresholds: Threshold settings (defaults to configured)

    Raises:
        InvalidConfigurationError: if budget <= 0
    """
    thresholds = thresholds or get_settings().thresholds
    spent = to_decimal(spent)
    budget = to_decimal(budget)
    if budget <= 0:
        raise InvalidConfigurationError(budget)

    daily_burn_rate = burn_rate(spent, days_elapsed)
    projected = daily_burn_rate * thresholds.projection_window_days

    days_remaining = 0
    if days_in_period is not None:
        days_remaining = max(days_in_period - max(days_elapsed, 0), 0)

    return BudgetMetrics(
        budget=budget,
        spent=spent,
        remaining=budget - spent,
        percent_used=percent_of(spent, budget),
        daily_burn_rate=daily_burn_rate,
        health_tier=health_tier(spent, budget, thresholds),
        days_elapsed=max(days_elapsed, 0),
        days_remaining=days_remaining,
        projected_month_end_total=projected,
        projected_overage=max(ZERO, projected - budget),
        projected_savings=max(ZERO, budget - projected),
    )


def budget_alert(
    metrics: BudgetMetrics,
    thresholds: Optional[ThresholdSettings] = None,
) -> Optional[BudgetAlert]:
    """
    Pick the dashboard banner for a budget position.

    Returns None while spending is below the warning threshold.
    """
    thresholds = thresholds or get_settings().thresholds
    percent = metrics.percent_used

    if percent < thresholds.warning_percent:
        return None

    if percent >= thresholds.exceeded_percent:
        return BudgetAlert(
            level=AlertLevel.EXCEEDED,
            icon="🚨",
            title="Budget Exceeded!",
            message=(
                f"You've exceeded your budget by {format_currency(abs(metrics.remaining))}. "
                "Consider reducing expenses."
            ),
        )
    if percent >= thresholds.critical_percent:
        return BudgetAlert(
            level=AlertLevel.CRITICAL,
            icon="⚠️",
            title=f"Budget Alert - {whole_percent(thresholds.critical_percent)}% Used",
            message=(
                f"Only {format_currency(metrics.remaining)} left for this month. "
                "Be careful with spending!"
            ),
        )
    return BudgetAlert(
        level=AlertLevel.WARNING,
        icon="⚡",
        title=f"Budget Warning - {whole_percent(thresholds.warning_percent)}% Used",
        message=(
            f"You've used {whole_percent(percent)}% of your budget. "
            "Track your expenses carefully."
        ),
    )
