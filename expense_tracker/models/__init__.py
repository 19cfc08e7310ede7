"""
Data Models Package

This package contains all Pydantic models used by the expense tracker engine.
Inputs (expenses, categories, budgets) and outputs (summaries, metrics,
insights) both conform to these schemas.
"""

from expense_tracker.models.expense import (
    Budget,
    Category,
    ExpenseRecord,
    Period,
)
from expense_tracker.models.metrics import (
    AggregationResult,
    AlertLevel,
    BudgetAlert,
    BudgetMetrics,
    CategorySummary,
    DailySummary,
    DashboardSnapshot,
    HealthTier,
    Insight,
    InsightKind,
    InsightTier,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Input models
    "Budget",
    "Category",
    "ExpenseRecord",
    "Period",
    # Derived models
    "AggregationResult",
    "AlertLevel",
    "BudgetAlert",
    "BudgetMetrics",
    "CategorySummary",
    "DailySummary",
    "DashboardSnapshot",
    "HealthTier",
    "Insight",
    "InsightKind",
    "InsightTier",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
