"""
Expense Store

Holds the current ExpenseTrackerState and is the single place it changes.
"""

from typing import Optional

from src.models.expense import ExpenseTrackerState
from src.state.actions import Action
from src.state.reducer import reduce


class ExpenseStore:
    """
    Single mutation entry point for the application state.

    Every change goes through `dispatch`.
    """

    def __init__(self, initial_state: Optional[ExpenseTrackerState] = None):
        self._state = initial_state or ExpenseTrackerState()

    @property
    def state(self) -> ExpenseTrackerState:
        return self._state

    def dispatch(self, action: Action) -> ExpenseTrackerState:
        self._state = reduce(self._state, action)
        return self._state

    def next_generation(self) -> int:
        """Sequence number for the next summarize request."""
        return self._state.summary_generation + 1
