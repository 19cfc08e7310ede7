"""
Audit Models for Expense Tracker

Every dashboard build produces a short trail of audit events:
what was aggregated, how the budget was judged, and what went wrong.

DESIGN DECISION: Audit events are values.
The engine builds them; the AuditLogger decides where they go.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Aggregation
    AGGREGATION_COMPLETED = "aggregation_completed"
    RECORDS_IGNORED = "records_ignored"

    # Evaluation
    BUDGET_EVALUATED = "budget_evaluated"
    BUDGET_ALERT_RAISED = "budget_alert_raised"
    INVALID_BUDGET = "invalid_budget"

    # Insights
    INSIGHTS_SELECTED = "insights_selected"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    correlation_id ties together all events of one dashboard build.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which period is this about?
    period: Optional[str] = Field(
        default=None,
        description="Period label, e.g. '2024-02'"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one dashboard build"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "period": self.period,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.budget_evaluated(
            period="2024-02",
            percent_used=Decimal("60"),
            health_tier="ok",
            correlation_id=correlation_id,
        )
    """

    @staticmethod
    def aggregation_completed(
        period: str,
        record_count: int,
        spent: Decimal,
        category_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AGGREGATION_COMPLETED,
            severity=AuditSeverity.DEBUG,
            period=period,
            correlation_id=correlation_id,
            description=f"Aggregated {record_count} expenses",
            details={
                "record_count": record_count,
                "spent": str(spent),
                "category_count": category_count,
            },
        )

    @staticmethod
    def records_ignored(
        period: str,
        ignored_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORDS_IGNORED,
            severity=AuditSeverity.WARNING,
            period=period,
            correlation_id=correlation_id,
            description=f"{ignored_count} expenses fell outside the period and were ignored",
            details={"ignored_count": ignored_count},
        )

    @staticmethod
    def budget_evaluated(
        period: str,
        percent_used: Decimal,
        health_tier: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EVALUATED,
            severity=AuditSeverity.INFO,
            period=period,
            correlation_id=correlation_id,
            description=f"Budget evaluated: {health_tier}",
            details={
                "percent_used": str(percent_used),
                "health_tier": health_tier,
            },
        )

    @staticmethod
    def budget_alert_raised(
        period: str,
        level: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_ALERT_RAISED,
            severity=AuditSeverity.WARNING,
            period=period,
            correlation_id=correlation_id,
            description=f"Budget alert raised: {level}",
            details={"level": level},
        )

    @staticmethod
    def invalid_budget(
        period: Optional[str],
        budget: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_BUDGET,
            severity=AuditSeverity.ERROR,
            period=period,
            correlation_id=correlation_id,
            description="Budget must be positive",
            details={"budget": str(budget)},
            error_code="INVALID_CONFIGURATION",
            error_message=f"Budget must be greater than zero, got {budget}",
        )

    @staticmethod
    def insights_selected(
        period: str,
        kinds: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INSIGHTS_SELECTED,
            severity=AuditSeverity.DEBUG,
            period=period,
            correlation_id=correlation_id,
            description=f"Selected {len(kinds)} insights",
            details={"kinds": kinds},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_code=error_type,
            error_message=error_message,
        )
