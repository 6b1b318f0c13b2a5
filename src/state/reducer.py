"""
Pure State Transitions and Derivations

DESIGN DECISION: Nothing in here touches the network, the clock or the
logger. Given the same state and action, `reduce` always returns the same
new state, which is what makes the store trivial to test.
"""

from typing import Iterable

from src.models.expense import Expense, ExpenseTrackerState, SummaryStatus
from src.state.actions import (
    Action,
    AddExpense,
    DeleteExpense,
    SetFilter,
    SummaryCompleted,
    SummaryRequested,
)


class DuplicateExpenseError(ValueError):
    """An expense with the same id is already in the list."""

    def __init__(self, expense: Expense):
        self.expense = expense
        super().__init__(f"Expense {expense.id} already exists")


class UnknownActionError(TypeError):
    """The reducer was handed something that is not an action."""
    pass


def filter_expenses(expenses: Iterable[Expense], query: str) -> list[Expense]:
    """
    Case-insensitive substring match on description.

    An empty query matches everything. Order is preserved.
    """
    needle = (query or "").casefold()
    if not needle:
        return list(expenses)
    return [e for e in expenses if needle in e.description.casefold()]


def visible_expenses(state: ExpenseTrackerState) -> list[Expense]:
    """The expenses the list on the page should show."""
    return filter_expenses(state.expenses, state.filter_query)


def is_latest_generation(state: ExpenseTrackerState, generation: int) -> bool:
    return generation == state.summary_generation


def reduce(state: ExpenseTrackerState, action: Action) -> ExpenseTrackerState:
    """
    Apply one action and return the new state.

    Raises:
        DuplicateExpenseError: If AddExpense carries an id already present
        UnknownActionError: If the action type is not recognised
    """
    if isinstance(action, AddExpense):
        if state.find(action.expense.id) is not None:
            raise DuplicateExpenseError(action.expense)
        return state.model_copy(
            update={"expenses": state.expenses + (action.expense,)}
        )

    elif isinstance(action, DeleteExpense):
        remaining = tuple(e for e in state.expenses if e.id != action.expense_id)
        if len(remaining) == len(state.expenses):
            return state
        return state.model_copy(update={"expenses": remaining})

    elif isinstance(action, SetFilter):
        if action.query == state.filter_query:
            return state
        return state.model_copy(update={"filter_query": action.query})

    elif isinstance(action, SummaryRequested):
        # Requests can only move forward; an old generation is a caller bug
        if action.generation <= state.summary_generation:
            raise ValueError(
                f"Summary generation {action.generation} is not newer than "
                f"{state.summary_generation}"
            )
        return state.model_copy(update={
            "summary_status": SummaryStatus.LOADING,
            "summary_generation": action.generation,
        })

    elif isinstance(action, SummaryCompleted):
        # Superseded responses never overwrite the latest request's result
        if not is_latest_generation(state, action.generation):
            return state
        return state.model_copy(update={
            "summary": action.summary,
            "summary_status": (
                SummaryStatus.SUCCEEDED if action.succeeded else SummaryStatus.FAILED
            ),
            "last_error": None if action.succeeded else action.error,
        })

    raise UnknownActionError(f"Unknown action: {type(action).__name__}")
