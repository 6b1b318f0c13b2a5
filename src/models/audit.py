"""
Audit Models for the Expense Tracker

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of every add, delete and summarize call
2. Debugging information when the summarization service misbehaves
3. An activity trail the user can inspect on the page

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Expense list changes
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_VALIDATION_FAILED = "expense_validation_failed"
    FILTER_CHANGED = "filter_changed"

    # Summarization
    SUMMARY_REQUESTED = "summary_requested"
    SUMMARY_COMPLETED = "summary_completed"
    SUMMARY_FAILED = "summary_failed"
    SUMMARY_DISCARDED = "summary_discarded"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
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

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'summary')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., an add and the summary it triggered)"
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

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Coffee", "50.00", correlation_id)
        event = AuditEventBuilder.summary_failed(generation, error, correlation_id)
    """

    @staticmethod
    def expense_added(
        expense_id: UUID,
        description: str,
        amount: Decimal,
        correlation_id: UUID,
        currency_symbol: str = "₹",
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense added: {description} - {currency_symbol}{amount}",
            details={
                "description": description,
                "amount": str(amount),
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(
        expense_id: UUID,
        found: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=(
                "Expense deleted" if found else "Delete requested for unknown expense"
            ),
            details={
                "found": found,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            correlation_id=correlation_id,
            description=f"Expense rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def filter_changed(query: str, match_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_CHANGED,
            severity=AuditSeverity.DEBUG,
            description="Expense filter changed",
            details={
                "query": query,
                "match_count": match_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def summary_requested(
        generation: int,
        expense_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_REQUESTED,
            entity_type="summary",
            correlation_id=correlation_id,
            description=f"Summary #{generation} requested for {expense_count} expenses",
            details={
                "generation": generation,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def summary_completed(
        generation: int,
        summary_length: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_COMPLETED,
            entity_type="summary",
            correlation_id=correlation_id,
            description=f"Summary #{generation} completed",
            details={
                "generation": generation,
                "summary_length": summary_length,
            },
        )

    @staticmethod
    def summary_failed(
        generation: int,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="summary",
            correlation_id=correlation_id,
            description=f"Summary #{generation} failed",
            error_message=error_message,
            details={
                "generation": generation,
            },
        )

    @staticmethod
    def summary_discarded(
        generation: int,
        latest_generation: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_DISCARDED,
            entity_type="summary",
            correlation_id=correlation_id,
            description=(
                f"Summary #{generation} discarded, superseded by #{latest_generation}"
            ),
            details={
                "generation": generation,
                "latest_generation": latest_generation,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
