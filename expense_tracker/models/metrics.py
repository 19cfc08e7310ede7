"""
Derived Models for Expense Tracker

Everything the engine hands back to the presentation layer.
These are snapshots: recomputed in full on every call, never patched.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.models.expense import Period


# =============================================================================
# ENUMS
# =============================================================================

class HealthTier(str, Enum):
    """
    Budget health, from percent of budget used.

    The dashboard colours spent amounts green / amber / red by tier.
    """
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def color(self) -> str:
        return {
            HealthTier.OK: "green",
            HealthTier.WARNING: "amber",
            HealthTier.CRITICAL: "red",
        }[self]


class InsightTier(str, Enum):
    """Tone of an insight card."""
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


class InsightKind(str, Enum):
    """Which rule produced an insight."""
    TOP_CATEGORY = "top_category"
    PACE = "pace"
    PROJECTION = "projection"


class AlertLevel(str, Enum):
    """Budget banner level. No banner is shown below the warning threshold."""
    WARNING = "warning"
    CRITICAL = "critical"
    EXCEEDED = "exceeded"


# =============================================================================
# AGGREGATION OUTPUT
# =============================================================================

class CategorySummary(BaseModel):
    """Spending in one category over a period."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    name: str
    icon: str = ""
    color: str = "#9CA3AF"
    total: Decimal = Field(..., ge=0)
    percentage_of_spent: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Share of total spend in the period (0-100)"
    )


class DailySummary(BaseModel):
    """Spending on one calendar day."""
    model_config = ConfigDict(frozen=True)

    day: int = Field(..., ge=1, le=31)
    date: dt.date
    total: Decimal = Field(..., ge=0)


class AggregationResult(BaseModel):
    """
    Result of folding one period's expenses.

    category_summaries is sorted by total, largest first.
    daily_summaries has one entry per day of the month.
    """
    model_config = ConfigDict(frozen=True)

    period: Period
    spent: Decimal = Field(..., ge=0)
    category_summaries: tuple[CategorySummary, ...] = ()
    daily_summaries: tuple[DailySummary, ...] = ()
    record_count: int = Field(default=0, ge=0)
    ignored_count: int = Field(
        default=0,
        ge=0,
        description="Records dropped for falling outside the period"
    )

    @property
    def uncategorized_total(self) -> Decimal:
        return self.spent - sum((c.total for c in self.category_summaries), Decimal("0"))


# =============================================================================
# EVALUATION OUTPUT
# =============================================================================

class BudgetMetrics(BaseModel):
    """
    Budget position for a period.

    remaining is signed: a negative value means the budget is exceeded.
    """
    model_config = ConfigDict(frozen=True)

    budget: Decimal = Field(..., gt=0)
    spent: Decimal = Field(..., ge=0)
    remaining: Decimal
    percent_used: Decimal = Field(..., ge=0)
    daily_burn_rate: Decimal = Field(..., ge=0)
    health_tier: HealthTier

    days_elapsed: int = Field(default=0, ge=0)
    days_remaining: int = Field(default=0, ge=0)

    projected_month_end_total: Decimal = Field(..., ge=0)
    projected_overage: Decimal = Field(..., ge=0)
    projected_savings: Decimal = Field(..., ge=0)

    @property
    def progress_percent(self) -> Decimal:
        """Percent used, capped at 100 for the progress ring."""
        return min(self.percent_used, Decimal("100"))

    @property
    def is_exceeded(self) -> bool:
        return self.remaining < 0


class BudgetAlert(BaseModel):
    """The banner shown at the top of the dashboard."""
    model_config = ConfigDict(frozen=True)

    level: AlertLevel
    icon: str
    title: str
    message: str


class Insight(BaseModel):
    """A single insight card."""
    model_config = ConfigDict(frozen=True)

    kind: InsightKind
    icon: str
    title: str
    description: str
    tier: InsightTier


# =============================================================================
# DASHBOARD
# =============================================================================

class DashboardSnapshot(BaseModel):
    """Everything the dashboard needs for one period, as of one day."""
    model_config = ConfigDict(frozen=True)

    period: Period
    as_of: dt.date
    aggregation: AggregationResult
    metrics: BudgetMetrics
    alert: Optional[BudgetAlert] = None
    insights: tuple[Insight, ...] = ()
