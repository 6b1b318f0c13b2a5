"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from src.models.expense import (
    SUMMARY_FAILED_MESSAGE,
    Expense,
    ExpenseTrackerState,
    SummaryRequest,
    SummaryResponse,
    SummaryStatus,
    ValidationIssue,
    ValidationResult,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "SUMMARY_FAILED_MESSAGE",
    "Expense",
    "ExpenseTrackerState",
    "SummaryRequest",
    "SummaryResponse",
    "SummaryStatus",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
