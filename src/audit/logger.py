"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Complete traceability
2. Debugging capability
3. User can see history of their interactions

The audit logger:
- Is async so it can sit inside the summarize flow without blocking it
- Never raises into the caller; a broken log must not break the page
- Supports correlation IDs to trace related events
- Keeps the most recent events in memory for the activity panel
"""

import logging
from collections import deque
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output through the stdlib root logger.

    structlog renders the JSON line; the stdlib handler only prints it.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail of recent events (for the activity panel)
    """

    def __init__(self, history_size: int = 100):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = structlog.get_logger("expense_tracker.audit")
        self._recent: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Recent events, newest first."""
        return list(reversed(self._recent))

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the local log write failed.
        """
        self._recent.append(event)

        log_dict = event.to_log_dict()
        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            logging.getLogger(__name__).exception(
                "Failed to write audit event %s", event.event_id
            )
            return False

        return True

    async def log_expense_added(
        self,
        expense_id: UUID,
        description: str,
        amount: Decimal,
        correlation_id: UUID,
        currency_symbol: str = "₹",
    ) -> None:
        """Log a new expense."""
        event = AuditEventBuilder.expense_added(
            expense_id=expense_id,
            description=description,
            amount=amount,
            correlation_id=correlation_id,
            currency_symbol=currency_symbol,
        )
        await self.log(event)

    async def log_expense_deleted(
        self,
        expense_id: UUID,
        found: bool,
        correlation_id: UUID,
    ) -> None:
        """Log a delete, including deletes of ids that were not there."""
        event = AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            found=found,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log a rejected add-expense form."""
        event = AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_filter_changed(self, query: str, match_count: int) -> None:
        event = AuditEventBuilder.filter_changed(query=query, match_count=match_count)
        await self.log(event)

    async def log_summary_requested(
        self,
        generation: int,
        expense_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.summary_requested(
            generation=generation,
            expense_count=expense_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_summary_completed(
        self,
        generation: int,
        summary_length: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.summary_completed(
            generation=generation,
            summary_length=summary_length,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_summary_failed(
        self,
        generation: int,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.summary_failed(
            generation=generation,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_summary_discarded(
        self,
        generation: int,
        latest_generation: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.summary_discarded(
            generation=generation,
            latest_generation=latest_generation,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log external service error."""
        event = AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., adding an expense).
    Pass it through all subsequent operations, including the summary
    the action triggers.
    """
    return uuid4()
