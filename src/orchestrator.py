"""
Main Orchestrator for the Expense Tracker

This module ties together all the components and defines the
end-to-end flows for:
1. Add (form input → validate → store → summarize)
2. Delete (store → summarize)
3. Filter (store, derived view only)
4. Summarize (store snapshot → HTTP → store)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The store is only changed through dispatch
- A summarize failure never breaks add/delete/filter
- Only the latest summarize request may write the summary
- Every step is audited
"""

from typing import Optional
from uuid import UUID

import structlog

from src.audit import AuditLogger, create_correlation_id
from src.config import AppSettings, get_settings
from src.models.expense import (
    SUMMARY_FAILED_MESSAGE,
    Expense,
    ExpenseTrackerState,
    ValidationResult,
)
from src.services.summarizer import (
    SummarizerClient,
    SummarizerError,
    SummarizerNotConfiguredError,
)
from src.state import (
    AddExpense,
    DeleteExpense,
    ExpenseStore,
    SetFilter,
    SummaryCompleted,
    SummaryRequested,
    is_latest_generation,
    visible_expenses,
)
from src.validation import ExpenseValidator


logger = structlog.get_logger("expense_tracker.orchestrator")


class ExpenseTrackerFlow:
    """
    Orchestrates everything the expense page can do.

    Add and delete always trigger a summary of the whole list.
    The summary is best effort: on any failure the fixed failure
    message is shown and the page stays usable.
    """

    def __init__(
        self,
        store: Optional[ExpenseStore] = None,
        summarizer: Optional[SummarizerClient] = None,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._settings = settings or get_settings().app
        self._store = store or ExpenseStore()
        self._summarizer = summarizer
        self._validator = validator or ExpenseValidator(self._settings)
        self._audit_logger = audit_logger or AuditLogger(self._settings.audit_history_size)

    @property
    def state(self) -> ExpenseTrackerState:
        return self._store.state

    @property
    def visible_expenses(self) -> list[Expense]:
        return visible_expenses(self._store.state)

    @property
    def summarizer_configured(self) -> bool:
        return self._summarizer is not None

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def describe_validation(self, result: ValidationResult) -> str:
        return self._validator.get_user_friendly_summary(result)

    async def add_expense(
        self,
        description: Optional[str],
        amount,
        expense_date,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Expense], ValidationResult]:
        """
        Validate the form input and, if valid, add the expense.

        Returns:
            (expense, validation_result)

        expense is None if validation failed; the list is unchanged then
        and no summary is requested.
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(description, amount, expense_date)

        if not result.is_valid:
            await self._audit_logger.log_validation_failed(
                issues=[
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                    if i.severity == "error"
                ],
                correlation_id=correlation_id,
            )
            return None, result

        expense = Expense(
            description=result.description,
            amount=result.amount,
            date=result.expense_date,
        )
        self._store.dispatch(AddExpense(expense=expense))

        await self._audit_logger.log_expense_added(
            expense_id=expense.id,
            description=expense.description,
            amount=expense.amount,
            correlation_id=correlation_id,
            currency_symbol=self._settings.currency_symbol,
        )

        await self.summarize(correlation_id=correlation_id)

        return expense, result

    async def delete_expense(
        self,
        expense_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete an expense by id.

        Unknown ids are not an error. The list is summarized either way.

        Returns:
            True if an expense was removed
        """
        correlation_id = correlation_id or create_correlation_id()

        found = self._store.state.find(expense_id) is not None
        self._store.dispatch(DeleteExpense(expense_id=expense_id))

        await self._audit_logger.log_expense_deleted(
            expense_id=expense_id,
            found=found,
            correlation_id=correlation_id,
        )

        await self.summarize(correlation_id=correlation_id)

        return found

    async def set_filter(self, query: str) -> list[Expense]:
        """
        Change the search text.

        Returns:
            The expenses matching the new query
        """
        previous = self._store.state.filter_query
        self._store.dispatch(SetFilter(query=query or ""))
        matches = self.visible_expenses

        if self._store.state.filter_query != previous:
            await self._audit_logger.log_filter_changed(
                query=self._store.state.filter_query,
                match_count=len(matches),
            )

        return matches

    async def summarize(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Summarize the current expense list.

        FLOW:
        1. Snapshot the list and take a new generation number
        2. Mark the summary as loading
        3. Call the summarization service
        4. Store the result, unless a newer request was made meanwhile

        Returns:
            The summary now in the state (which may belong to a newer request)
        """
        correlation_id = correlation_id or create_correlation_id()

        expenses = self._store.state.expenses
        generation = self._store.next_generation()
        self._store.dispatch(SummaryRequested(generation=generation))

        await self._audit_logger.log_summary_requested(
            generation=generation,
            expense_count=len(expenses),
            correlation_id=correlation_id,
        )

        try:
            if self._summarizer is None:
                raise SummarizerNotConfiguredError(
                    "Summarizer is not configured (set SUMMARIZER_API_URL and SUMMARIZER_API_KEY)"
                )
            summary = await self._summarizer.summarize(expenses)
            completion = SummaryCompleted(
                generation=generation,
                succeeded=True,
                summary=summary,
            )
        except SummarizerError as e:
            logger.warning(
                "summarize_failed",
                generation=generation,
                error=str(e),
                error_type=type(e).__name__,
            )
            await self._audit_logger.log_external_service_error(
                service="summarizer",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            completion = SummaryCompleted(
                generation=generation,
                succeeded=False,
                summary=SUMMARY_FAILED_MESSAGE,
                error=str(e),
            )
        except Exception as e:
            logger.exception(
                "summarize_unexpected_error",
                generation=generation,
                error_type=type(e).__name__,
            )
            await self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"generation": generation},
                correlation_id=correlation_id,
            )
            completion = SummaryCompleted(
                generation=generation,
                succeeded=False,
                summary=SUMMARY_FAILED_MESSAGE,
                error=f"Unexpected error during summarization: {type(e).__name__}",
            )

        superseded = not is_latest_generation(self._store.state, generation)
        self._store.dispatch(completion)

        if superseded:
            await self._audit_logger.log_summary_discarded(
                generation=generation,
                latest_generation=self._store.state.summary_generation,
                correlation_id=correlation_id,
            )
        elif completion.succeeded:
            await self._audit_logger.log_summary_completed(
                generation=generation,
                summary_length=len(completion.summary),
                correlation_id=correlation_id,
            )
        else:
            await self._audit_logger.log_summary_failed(
                generation=generation,
                error_message=completion.error or "",
                correlation_id=correlation_id,
            )

        return self._store.state.summary


def create_app_components(
    use_summarizer: bool = True,
) -> ExpenseTrackerFlow:
    """
    Factory function to create the application flow.

    Args:
        use_summarizer: Whether to connect the summarization service.
                        Set to False to run without it.

    Returns:
        ExpenseTrackerFlow with a fresh, empty store
    """
    settings = get_settings().app
    summarizer = None

    if use_summarizer:
        try:
            summarizer = SummarizerClient(currency_symbol=settings.currency_symbol)
        except Exception as e:
            # Summarizer not configured - continue without it
            logger.warning("summarizer_not_configured", error=str(e))
            summarizer = None

    return ExpenseTrackerFlow(
        summarizer=summarizer,
        audit_logger=AuditLogger(settings.audit_history_size),
        settings=settings,
    )
