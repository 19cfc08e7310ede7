"""
Audit Logger

DESIGN DECISION: Every dashboard build leaves a trail.
This provides:
1. Traceability of the numbers a user was shown
2. Debugging capability when a dashboard looks wrong
3. A visible record of budget configuration errors

The audit logger:
- Is synchronous; the engine never suspends
- Only writes to the structured local log
- Supports correlation IDs to trace related events
"""

import logging
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_log_level(level: str) -> None:
    """Set the stdlib level structlog filters against."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("expense_tracker").setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs each event at the level matching its severity. When disabled,
    events are built but dropped, so callers never need to branch.
    """

    _LEVELS = {
        AuditSeverity.DEBUG: "debug",
        AuditSeverity.INFO: "info",
        AuditSeverity.WARNING: "warning",
        AuditSeverity.ERROR: "error",
        AuditSeverity.CRITICAL: "critical",
    }

    def __init__(self, enabled: bool = True, history_size: int = 500):
        self._enabled = enabled
        self._logger = structlog.get_logger("expense_tracker.audit")
        self._events: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def events(self) -> tuple[AuditEvent, ...]:
        """Most recent events logged by this logger, oldest first."""
        return tuple(self._events)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        if not self._enabled:
            return

        self._events.append(event)
        method = getattr(self._logger, self._LEVELS[event.severity])
        method("audit_event", **event.to_log_dict())


def create_correlation_id(correlation_id: Optional[UUID] = None) -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a dashboard build and pass it
    to every event of that build.
    """
    return correlation_id or uuid4()
