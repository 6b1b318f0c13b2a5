"""
Shared fixtures.

No real API calls in tests: the summarizer always talks to an
httpx.MockTransport.
"""

from datetime import date
from decimal import Decimal

import httpx
import pytest

from src.config import AppSettings, SummarizerSettings
from src.models.expense import Expense
from src.orchestrator import ExpenseTrackerFlow
from src.services.summarizer import SummarizerClient


@pytest.fixture
def app_settings():
    return AppSettings(
        currency_symbol="₹",
        max_expense_amount=1000000.0,
        future_date_tolerance_days=7,
    )


@pytest.fixture
def summarizer_settings():
    return SummarizerSettings(
        api_url="https://summarizer.test/v1/summarize",
        api_key="test-key",
    )


@pytest.fixture
def make_client(summarizer_settings):
    """Build a SummarizerClient whose requests go to `handler`."""
    def _make(handler, settings=None):
        return SummarizerClient(
            settings=settings or summarizer_settings,
            currency_symbol="₹",
            transport=httpx.MockTransport(handler),
        )
    return _make


@pytest.fixture
def make_flow(make_client, app_settings):
    """Build an ExpenseTrackerFlow backed by a mocked summarizer."""
    def _make(handler=None):
        summarizer = make_client(handler) if handler else None
        return ExpenseTrackerFlow(summarizer=summarizer, settings=app_settings)
    return _make


@pytest.fixture
def coffee():
    return Expense(description="Coffee", amount=Decimal("50"), date=date(2024, 1, 1))


@pytest.fixture
def taxi():
    return Expense(description="Taxi", amount=Decimal("220.50"), date=date(2024, 1, 2))
