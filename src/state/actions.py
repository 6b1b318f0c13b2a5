"""
Store Actions

Every change to the application state is described by one of these.
The reducer is the only place that turns an action into a new state.
"""

from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.models.expense import Expense


class AddExpense(BaseModel):
    """Append a validated expense to the list."""
    model_config = ConfigDict(frozen=True)

    expense: Expense


class DeleteExpense(BaseModel):
    """Remove an expense by id. Unknown ids are ignored."""
    model_config = ConfigDict(frozen=True)

    expense_id: UUID


class SetFilter(BaseModel):
    """Replace the search text."""
    model_config = ConfigDict(frozen=True)

    query: str = ""


class SummaryRequested(BaseModel):
    """A summarize call is about to go out."""
    model_config = ConfigDict(frozen=True)

    generation: int = Field(ge=1)


class SummaryCompleted(BaseModel):
    """
    A summarize call resolved.

    `summary` is the text to show: the service's answer on success,
    the fixed failure message otherwise.
    """
    model_config = ConfigDict(frozen=True)

    generation: int = Field(ge=1)
    succeeded: bool
    summary: str
    error: Optional[str] = None


Action = Union[AddExpense, DeleteExpense, SetFilter, SummaryRequested, SummaryCompleted]
