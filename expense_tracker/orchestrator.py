"""
Main Orchestrator for Expense Tracker

This module ties the engine together into the one flow the dashboard
needs: expenses + categories + budget + today → DashboardSnapshot.

Flow:
1. Aggregate → spent, category breakdown, daily series
2. Evaluate → remaining, burn rate, projection, health tier
3. Alert → banner for the top of the dashboard (if any)
4. Insights → ordered insight cards

DESIGN DECISION: The orchestrator enforces the boundaries:
- Only records inside the budget's month are counted
- A non-positive budget stops the flow with InvalidConfigurationError
- Every step is audited under one correlation ID
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from expense_tracker.aggregation import CategoryLookup, aggregate
from expense_tracker.audit import AuditLogger, configure_log_level, create_correlation_id
from expense_tracker.config import Settings, get_settings
from expense_tracker.evaluation import budget_alert, evaluate
from expense_tracker.insights import select_insights
from expense_tracker.metrics.primitives import InvalidConfigurationError, to_decimal
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import Budget, ExpenseRecord, Period
from expense_tracker.models.metrics import DashboardSnapshot


class DashboardFlow:
    """
    Builds dashboard snapshots.

    Stateless apart from the audit logger: the same flow can serve
    any number of users and periods.
    """

    def __init__(
        self,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._audit_logger = audit_logger

    def build(
        self,
        records: Iterable[ExpenseRecord],
        categories: CategoryLookup,
        budget: Union[Budget, Decimal, int, float],
        as_of: date,
        period: Optional[Period] = None,
        correlation_id: Optional[UUID] = None,
    ) -> DashboardSnapshot:
        """
        Build the dashboard for one period.

        Args:
            records: Expenses fetched for the period
            categories: Category lookup
            budget: The period's Budget, or a bare amount with `period`
            as_of: Reference date for elapsed days (usually today)
            period: Required when budget is a bare amount
            correlation_id: Ties this build's audit events together

        Raises:
            InvalidConfigurationError: if the budget amount is <= 0
            Exception: any failure while aggregating records, after auditing it
        """
        correlation_id = create_correlation_id(correlation_id)

        if isinstance(budget, Budget):
            period = budget.period
            amount = budget.amount
        else:
            if period is None:
                raise ValueError("period is required when budget is a bare amount")
            amount = to_decimal(budget)
        period_key = f"{period.year}-{period.month:02d}"

        thresholds = self._settings.thresholds

        # Step 1: Aggregate
        try:
            aggregation = aggregate(records, categories, period.month, period.year)
        except Exception as e:
            # Records usually stream from the data-fetch layer
            self._audit(AuditEventBuilder.system_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"period": period_key, "step": "aggregate"},
                correlation_id=correlation_id,
            ))
            raise
        self._audit(AuditEventBuilder.aggregation_completed(
            period=period_key,
            record_count=aggregation.record_count,
            spent=aggregation.spent,
            category_count=len(aggregation.category_summaries),
            correlation_id=correlation_id,
        ))
        if aggregation.ignored_count:
            self._audit(AuditEventBuilder.records_ignored(
                period=period_key,
                ignored_count=aggregation.ignored_count,
                correlation_id=correlation_id,
            ))

        # Step 2: Evaluate
        try:
            metrics = evaluate(
                aggregation.spent,
                amount,
                period.days_elapsed(as_of),
                days_in_period=period.days_in_month,
                thresholds=thresholds,
            )
        except InvalidConfigurationError as e:
            self._audit(AuditEventBuilder.invalid_budget(
                period=period_key,
                budget=e.budget,
                correlation_id=correlation_id,
            ))
            raise

        self._audit(AuditEventBuilder.budget_evaluated(
            period=period_key,
            percent_used=metrics.percent_used,
            health_tier=metrics.health_tier.value,
            correlation_id=correlation_id,
        ))

        # Step 3: Alert
        alert = budget_alert(metrics, thresholds)
        if alert is not None:
            self._audit(AuditEventBuilder.budget_alert_raised(
                period=period_key,
                level=alert.level.value,
                correlation_id=correlation_id,
            ))

        # Step 4: Insights
        insights = select_insights(
            metrics,
            aggregation.category_summaries,
            thresholds=thresholds,
        )
        self._audit(AuditEventBuilder.insights_selected(
            period=period_key,
            kinds=[i.kind.value for i in insights],
            correlation_id=correlation_id,
        ))

        return DashboardSnapshot(
            period=period,
            as_of=as_of,
            aggregation=aggregation,
            metrics=metrics,
            alert=alert,
            insights=tuple(insights),
        )

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)


def create_dashboard_flow(settings: Optional[Settings] = None) -> DashboardFlow:
    """
    Factory function to create a configured DashboardFlow.

    Audit logging follows AppSettings.audit_enabled; the log level
    follows AppSettings.log_level.
    """
    settings = settings or get_settings()
    app = settings.app

    configure_log_level(app.log_level)
    audit_logger = AuditLogger(enabled=app.audit_enabled)

    return DashboardFlow(audit_logger=audit_logger, settings=settings)
