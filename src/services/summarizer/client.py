"""
Expense Summarization Client

Sends the expense list, flattened into one paragraph of text, to an
external natural-language service and returns the summary it writes.

Contract:
    POST <SUMMARIZER_API_URL>
    Authorization: Bearer <SUMMARIZER_API_KEY>
    {"text": "Description: Coffee, Amount: ₹50.00 on 2024-01-01. ..."}

    200 {"summary": "..."}

Anything outside 2xx, or a body without a string `summary`, is an error.
This module only raises; deciding what the user sees on failure is the
orchestrator's job.
"""

from typing import Iterable, Optional

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import SummarizerSettings, get_settings
from src.models.expense import Expense, SummaryRequest, SummaryResponse


class SummarizerError(Exception):
    """Base exception for summarization errors."""
    pass


class SummarizerNotConfiguredError(SummarizerError):
    """No endpoint/credential was configured."""
    pass


class SummarizerHTTPError(SummarizerError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


class SummarizerResponseError(SummarizerError):
    """The endpoint answered 2xx but the body is not a usable summary."""
    pass


def format_expenses_text(
    expenses: Iterable[Expense],
    currency_symbol: str = "₹",
) -> str:
    """
    Flatten expenses into the text sent for summarization.

    One clause per expense, joined with ". ". An empty list gives "".
    """
    return ". ".join(e.to_summary_clause(currency_symbol) for e in expenses)


class SummarizerClient:
    """
    HTTP client for the summarization endpoint.

    A fresh httpx.AsyncClient is opened per call so the client is safe to
    use from whatever event loop the caller is running.
    """

    def __init__(
        self,
        settings: Optional[SummarizerSettings] = None,
        currency_symbol: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Endpoint configuration. Loaded from the environment if None.
            currency_symbol: Symbol used in the request text.
            transport: Optional httpx transport (tests pass a MockTransport).
        """
        self._settings = settings or get_settings().summarizer
        self._currency_symbol = currency_symbol or get_settings().app.currency_symbol
        self._transport = transport

    def _get_headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._settings.api_key}",
        }

    def build_request(self, expenses: Iterable[Expense]) -> SummaryRequest:
        return SummaryRequest(
            text=format_expenses_text(expenses, self._currency_symbol)
        )

    async def _post(self, request: SummaryRequest) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self._settings.timeout_seconds,
        ) as client:
            return await client.post(
                self._settings.api_url,
                headers=self._get_headers(),
                json=request.model_dump(),
            )

    async def summarize(self, expenses: Iterable[Expense]) -> str:
        """
        Summarize the given expenses.

        Returns:
            The summary text from the service

        Raises:
            SummarizerHTTPError: Non-2xx status
            SummarizerResponseError: Body is not JSON or has no `summary`
            SummarizerError: Network failure (after the configured attempts)
        """
        request = self.build_request(expenses)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self._post(request)
        except httpx.HTTPError as e:
            raise SummarizerError(f"Summarization request failed: {e}") from e

        if not response.is_success:
            raise SummarizerHTTPError(
                response.status_code,
                f"HTTP error! status: {response.status_code}",
            )

        try:
            payload = SummaryResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SummarizerResponseError(
                f"Summarization response has no usable summary: {e}"
            ) from e

        return payload.summary
