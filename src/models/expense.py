"""
Core Data Models for the Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be immutable, so every state change is an explicit replacement

DESIGN DECISION: The whole application state is one frozen Pydantic model.
Nothing mutates it in place; the store swaps in a new snapshot per action.
"""

from datetime import date, datetime
from decimal import Decimal, localcontext
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


SUMMARY_FAILED_MESSAGE = "Failed to summarize expenses"

# The Expense model has a field called `date`
CalendarDate = date

CENTS = Decimal("0.01")


def round_to_cents(amount: Decimal) -> Decimal:
    """
    Quantize an amount to two decimal places.

    The default context keeps 28 significant digits, which is too few for
    amounts with a long integer part, so precision is widened to fit.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENTS)


# =============================================================================
# ENUMS
# =============================================================================

class SummaryStatus(str, Enum):
    """
    Lifecycle of a single summarize call.

    idle -> loading -> (succeeded | failed)
    """
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded spend.

    Created on form submission and never edited afterwards.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Amount spent"
    )
    date: CalendarDate = Field(
        ...,
        description="Calendar date of the expense"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def quantize_amount(cls, v):
        """Round to paise so 50 and 50.00 compare equal and format the same."""
        if isinstance(v, (int, float, str, Decimal)) and not isinstance(v, bool):
            try:
                return round_to_cents(Decimal(str(v)))
            except ArithmeticError:
                return v
        return v

    def to_summary_clause(self, currency_symbol: str = "₹") -> str:
        """Render this expense as one clause of the summarization text."""
        return (
            f"Description: {self.description}, "
            f"Amount: {currency_symbol}{self.amount:.2f} on {self.date.isoformat()}"
        )


# =============================================================================
# APPLICATION STATE
# =============================================================================

class ExpenseTrackerState(BaseModel):
    """
    Snapshot of everything the page shows.

    The expense list is the only source of truth. The filtered view
    is derived from it and never stored.
    """
    model_config = ConfigDict(frozen=True)

    expenses: tuple[Expense, ...] = Field(
        default=(),
        description="All expenses, in insertion order"
    )
    filter_query: str = Field(
        default="",
        description="Current search text"
    )

    # Summary
    summary: str = Field(
        default="",
        description="Latest summary text or the failure message"
    )
    summary_status: SummaryStatus = Field(
        default=SummaryStatus.IDLE,
    )
    summary_generation: int = Field(
        default=0,
        ge=0,
        description="Sequence number of the most recent summarize request"
    )
    last_error: Optional[str] = Field(
        default=None,
        description="Error from the last failed summarize call"
    )

    @property
    def is_loading(self) -> bool:
        return self.summary_status == SummaryStatus.LOADING

    @property
    def total_amount(self) -> Decimal:
        return sum((e.amount for e in self.expenses), Decimal("0.00"))

    def find(self, expense_id: UUID) -> Optional[Expense]:
        """Get an expense by id, or None."""
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        return None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating the add-expense form.

    When valid, the parsed values are carried along so the caller
    does not have to parse the raw input a second time.
    """

    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    is_valid: bool = Field(
        ...,
        description="Can the expense be added?"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    # Parsed values (only set when valid)
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    expense_date: Optional[date] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


# =============================================================================
# SUMMARIZER WIRE MODELS
# =============================================================================

class SummaryRequest(BaseModel):
    """JSON body sent to the summarization endpoint."""

    text: str


class SummaryResponse(BaseModel):
    """JSON body expected back from the summarization endpoint."""
    model_config = ConfigDict(extra="ignore")

    summary: str
