"""
State Package

Explicit application state, the actions that change it and the
pure functions that derive views from it.
"""

from src.state.actions import (
    Action,
    AddExpense,
    DeleteExpense,
    SetFilter,
    SummaryCompleted,
    SummaryRequested,
)
from src.state.reducer import (
    DuplicateExpenseError,
    UnknownActionError,
    filter_expenses,
    is_latest_generation,
    reduce,
    visible_expenses,
)
from src.state.store import ExpenseStore

__all__ = [
    # Actions
    "Action",
    "AddExpense",
    "DeleteExpense",
    "SetFilter",
    "SummaryCompleted",
    "SummaryRequested",
    # Reducer
    "DuplicateExpenseError",
    "UnknownActionError",
    "filter_expenses",
    "is_latest_generation",
    "reduce",
    "visible_expenses",
    # Store
    "ExpenseStore",
]
