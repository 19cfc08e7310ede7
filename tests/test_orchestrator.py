"""Tests for the dashboard flow."""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from expense_tracker.audit import AuditLogger
from expense_tracker.metrics import InvalidConfigurationError
from expense_tracker.models import (
    AlertLevel,
    AuditEventType,
    Budget,
    ExpenseRecord,
    HealthTier,
    InsightKind,
    Period,
)
from expense_tracker.orchestrator import DashboardFlow, create_dashboard_flow


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def flow(audit_logger) -> DashboardFlow:
    return DashboardFlow(audit_logger=audit_logger)


class TestDashboardFlow:
    """End-to-end dashboard builds."""

    def test_february_scenario(self, flow, february_records, categories, february_budget):
        snapshot = flow.build(february_records, categories, february_budget, date(2024, 2, 20))

        assert snapshot.period == Period(month=2, year=2024)
        assert snapshot.aggregation.spent == Decimal("3000")
        assert len(snapshot.aggregation.daily_summaries) == 29

        metrics = snapshot.metrics
        assert metrics.remaining == Decimal("2000")
        assert metrics.percent_used == Decimal("60")
        assert metrics.daily_burn_rate == Decimal("150")
        assert metrics.health_tier == HealthTier.OK
        assert metrics.projected_month_end_total == Decimal("4500")
        assert metrics.projected_savings == Decimal("500")
        assert metrics.days_remaining == 9

        assert snapshot.alert is None
        assert [i.kind for i in snapshot.insights] == [
            InsightKind.TOP_CATEGORY,
            InsightKind.PACE,
            InsightKind.PROJECTION,
        ]

    def test_past_period_counts_whole_month(self, flow, february_records, categories, february_budget):
        snapshot = flow.build(february_records, categories, february_budget, date(2024, 3, 10))
        assert snapshot.metrics.days_elapsed == 29
        assert snapshot.metrics.days_remaining == 0

    def test_future_period_has_no_burn_rate(self, flow, categories, february_budget):
        snapshot = flow.build([], categories, february_budget, date(2024, 1, 15))
        assert snapshot.metrics.days_elapsed == 0
        assert snapshot.metrics.daily_burn_rate == Decimal("0")
        assert [i.kind for i in snapshot.insights] == [InsightKind.PACE]

    def test_alert_when_near_limit(self, flow, categories):
        budget = Budget(amount=Decimal("10000"), month=3, year=2024)
        records = [ExpenseRecord(amount=Decimal("9500"), date=date(2024, 3, 2), category_id="food")]

        snapshot = flow.build(records, categories, budget, date(2024, 3, 25))

        assert snapshot.metrics.health_tier == HealthTier.CRITICAL
        assert snapshot.alert.level == AlertLevel.CRITICAL
        pace = next(i for i in snapshot.insights if i.kind == InsightKind.PACE)
        assert pace.description == "Only ₹500.00 left. Try to minimize expenses!"

    def test_bare_budget_amount_with_period(self, flow, february_records, categories):
        snapshot = flow.build(
            february_records,
            categories,
            Decimal("5000"),
            date(2024, 2, 20),
            period=Period(month=2, year=2024),
        )
        assert snapshot.metrics.remaining == Decimal("2000")

    def test_bare_budget_amount_requires_period(self, flow, february_records, categories):
        with pytest.raises(ValueError, match="period is required"):
            flow.build(february_records, categories, Decimal("5000"), date(2024, 2, 20))

    @pytest.mark.parametrize("amount", [0, -100])
    def test_invalid_budget_raises_and_is_audited(self, flow, audit_logger, february_records, categories, amount):
        with pytest.raises(InvalidConfigurationError):
            flow.build(
                february_records,
                categories,
                amount,
                date(2024, 2, 20),
                period=Period(month=2, year=2024),
            )

        assert audit_logger.events[-1].event_type == AuditEventType.INVALID_BUDGET

    def test_works_without_audit_logger(self, february_records, categories, february_budget):
        snapshot = DashboardFlow().build(
            february_records, categories, february_budget, date(2024, 2, 20)
        )
        assert snapshot.aggregation.spent == Decimal("3000")


class TestAuditTrail:
    """Tests for the events a build emits."""

    def test_events_share_correlation_id(self, flow, audit_logger, february_records, categories, february_budget):
        correlation_id = uuid4()
        flow.build(
            february_records,
            categories,
            february_budget,
            date(2024, 2, 20),
            correlation_id=correlation_id,
        )

        assert [e.event_type for e in audit_logger.events] == [
            AuditEventType.AGGREGATION_COMPLETED,
            AuditEventType.BUDGET_EVALUATED,
            AuditEventType.INSIGHTS_SELECTED,
        ]
        assert all(e.correlation_id == correlation_id for e in audit_logger.events)
        assert all(e.period == "2024-02" for e in audit_logger.events)

    def test_ignored_records_and_alert_are_audited(self, flow, audit_logger, categories):
        budget = Budget(amount=Decimal("1000"), month=2, year=2024)
        records = [
            ExpenseRecord(amount=Decimal("800"), date=date(2024, 2, 5)),
            ExpenseRecord(amount=Decimal("50"), date=date(2024, 3, 1)),
        ]

        flow.build(records, categories, budget, date(2024, 2, 10))

        types = [e.event_type for e in audit_logger.events]
        assert AuditEventType.RECORDS_IGNORED in types
        assert AuditEventType.BUDGET_ALERT_RAISED in types

    def test_failing_records_are_audited_and_reraised(self, flow, audit_logger, categories, february_budget):
        correlation_id = uuid4()

        def broken_fetch():
            yield ExpenseRecord(amount=Decimal("10"), date=date(2024, 2, 1))
            raise ConnectionError("expense stream dropped")

        with pytest.raises(ConnectionError, match="expense stream dropped"):
            flow.build(
                broken_fetch(),
                categories,
                february_budget,
                date(2024, 2, 20),
                correlation_id=correlation_id,
            )

        event = audit_logger.events[-1]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.error_code == "ConnectionError"
        assert event.error_message == "expense stream dropped"
        assert event.correlation_id == correlation_id
        assert event.details == {"period": "2024-02", "step": "aggregate"}

    def test_disabled_logger_keeps_nothing(self, february_records, categories, february_budget):
        audit_logger = AuditLogger(enabled=False)
        DashboardFlow(audit_logger=audit_logger).build(
            february_records, categories, february_budget, date(2024, 2, 20)
        )
        assert audit_logger.events == ()


class TestCreateDashboardFlow:
    """Tests for the factory."""

    def test_creates_flow(self, february_records, categories, february_budget):
        flow = create_dashboard_flow()
        snapshot = flow.build(february_records, categories, february_budget, date(2024, 2, 20))
        assert snapshot.metrics.health_tier == HealthTier.OK

    def test_thresholds_from_environment(self, monkeypatch, february_records, categories, february_budget):
        monkeypatch.setenv("EXPENSE_TRACKER_THRESHOLD_WARNING_PERCENT", "50")
        flow = create_dashboard_flow()
        snapshot = flow.build(february_records, categories, february_budget, date(2024, 2, 20))

        assert snapshot.metrics.health_tier == HealthTier.WARNING
        assert snapshot.alert.level == AlertLevel.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
