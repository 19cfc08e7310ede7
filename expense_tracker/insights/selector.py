"""
Insight Selector

Turns budget metrics into a short, ordered list of insight cards.

DESIGN DECISION: Insights come from an ordered rule table.
Each rule is tagged with the InsightKind it produces and runs at most
once, in table order, so card order is stable. The pace rule returns
an Insight (never None), so every selection has exactly one pace card.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from expense_tracker.aggregation.engine import top_category as find_top_category
from expense_tracker.config import ThresholdSettings, get_settings
from expense_tracker.metrics.primitives import format_currency, percent_of, whole_percent
from expense_tracker.models.metrics import (
    BudgetMetrics,
    CategorySummary,
    Insight,
    InsightKind,
    InsightTier,
)


@dataclass(frozen=True)
class _RuleInput:
    metrics: BudgetMetrics
    top: Optional[CategorySummary]
    thresholds: ThresholdSettings


def _top_category_insight(inp: _RuleInput) -> Optional[Insight]:
    top = inp.top
    if top is None or top.total <= 0:
        return None

    share = percent_of(top.total, inp.metrics.spent)
    return Insight(
        kind=InsightKind.TOP_CATEGORY,
        icon=top.icon,
        title=f"Top Spending: {top.name}",
        description=(
            f"You spent {format_currency(top.total)} ({whole_percent(share)}% of total) "
            f"on {top.name}"
        ),
        tier=InsightTier.INFO,
    )


def suggested_daily_cap(metrics: BudgetMetrics) -> Decimal:
    """What can still be spent per day; the whole remainder on the last day."""
    if metrics.days_remaining <= 0:
        return metrics.remaining
    return metrics.remaining / metrics.days_remaining


def _pace_insight(inp: _RuleInput) -> Insight:
    metrics, thresholds = inp.metrics, inp.thresholds
    percent = metrics.percent_used

    if percent < thresholds.warning_percent:
        return Insight(
            kind=InsightKind.PACE,
            icon="🎯",
            title="Great Job!",
            description=(
                f"You're on track with only {whole_percent(percent)}% of budget used. "
                "Keep it up!"
            ),
            tier=InsightTier.SUCCESS,
        )
    if percent < thresholds.critical_percent:
        return Insight(
            kind=InsightKind.PACE,
            icon="⚡",
            title="Watch Your Spending",
            description=(
                f"You can spend {format_currency(suggested_daily_cap(metrics))}/day "
                "for the rest of the month"
            ),
            tier=InsightTier.WARNING,
        )
    if percent < thresholds.exceeded_percent:
        return Insight(
            kind=InsightKind.PACE,
            icon="⚠️",
            title="Almost at Budget Limit",
            description=(
                f"Only {format_currency(metrics.remaining)} left. "
                "Try to minimize expenses!"
            ),
            tier=InsightTier.WARNING,
        )
    return Insight(
        kind=InsightKind.PACE,
        icon="🚨",
        title="Budget Exceeded",
        description=(
            f"You've exceeded your budget by {format_currency(abs(metrics.remaining))}"
        ),
        tier=InsightTier.WARNING,
    )


def _projection_insight(inp: _RuleInput) -> Optional[Insight]:
    metrics = inp.metrics
    if metrics.daily_burn_rate <= 0:
        return None

    if metrics.projected_overage > 0:
        return Insight(
            kind=InsightKind.PROJECTION,
            icon="📊",
            title="Spending Projection",
            description=(
                f"At current rate ({format_currency(metrics.daily_burn_rate)}/day), "
                f"you'll exceed budget by {format_currency(metrics.projected_overage)}"
            ),
            tier=InsightTier.WARNING,
        )
    return Insight(
        kind=InsightKind.PROJECTION,
        icon="✨",
        title="Projected Savings",
        description=(
            f"At current rate, you'll save "
            f"{format_currency(metrics.projected_savings)} this month!"
        ),
        tier=InsightTier.SUCCESS,
    )


# Evaluated top to bottom
RULES: tuple[tuple[InsightKind, Callable[[_RuleInput], Optional[Insight]]], ...] = (
    (InsightKind.TOP_CATEGORY, _top_category_insight),
    (InsightKind.PACE, _pace_insight),
    (InsightKind.PROJECTION, _projection_insight),
)


def select_insights(
    metrics: BudgetMetrics,
    category_summaries: tuple[CategorySummary, ...] = (),
    top_category: Optional[CategorySummary] = None,
    thresholds: Optional[ThresholdSettings] = None,
) -> list[Insight]:
    """
    Select the insight cards for a budget position.

    Args:
        metrics: Output of evaluate()
        category_summaries: Sorted category summaries from aggregate()
        top_category: Overrides the top category; defaults to the
            largest summary with any spending

    Returns:
        Insights in rule order: top category, pace, projection
    """
    inp = _RuleInput(
        metrics=metrics,
        top=top_category if top_category is not None else find_top_category(category_summaries),
        thresholds=thresholds or get_settings().thresholds,
    )

    insights = []
    for kind, rule in RULES:
        insight = rule(inp)
        if insight is not None:
            assert insight.kind == kind, f"{rule.__name__} produced {insight.kind}, expected {kind}"
            insights.append(insight)
    return insights
