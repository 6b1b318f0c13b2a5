"""Tests for the summarization client (mocked transport, no network)."""

import json

import httpx
import pytest

from src.config import SummarizerSettings
from src.services.summarizer import (
    SummarizerError,
    SummarizerHTTPError,
    SummarizerResponseError,
    format_expenses_text,
)


class TestFormatExpensesText:
    """Tests for the request text."""

    def test_single_expense(self, coffee):
        assert format_expenses_text([coffee]) == (
            "Description: Coffee, Amount: ₹50.00 on 2024-01-01"
        )

    def test_clauses_joined(self, coffee, taxi):
        assert format_expenses_text([coffee, taxi]) == (
            "Description: Coffee, Amount: ₹50.00 on 2024-01-01. "
            "Description: Taxi, Amount: ₹220.50 on 2024-01-02"
        )

    def test_empty_list(self):
        assert format_expenses_text([]) == ""

    def test_currency_symbol(self, coffee):
        assert "Amount: $50.00" in format_expenses_text([coffee], "$")


class TestSummarizerClient:
    """Tests for SummarizerClient.summarize."""

    @pytest.mark.asyncio
    async def test_success(self, make_client, coffee):
        """Test the summary field is returned."""
        def handler(request):
            return httpx.Response(200, json={"summary": "You spent ₹50 on Coffee."})

        client = make_client(handler)
        assert await client.summarize([coffee]) == "You spent ₹50 on Coffee."

    @pytest.mark.asyncio
    async def test_request_shape(self, make_client, coffee):
        """Test method, URL, headers and JSON body."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"summary": "ok"})

        await make_client(handler).summarize([coffee])

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://summarizer.test/v1/summarize"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "text": "Description: Coffee, Amount: ₹50.00 on 2024-01-01"
        }

    @pytest.mark.asyncio
    async def test_any_2xx_is_success(self, make_client, coffee):
        def handler(request):
            return httpx.Response(201, json={"summary": "created"})

        assert await make_client(handler).summarize([coffee]) == "created"

    @pytest.mark.asyncio
    async def test_http_500(self, make_client, coffee):
        """Test non-2xx status raises SummarizerHTTPError."""
        def handler(request):
            return httpx.Response(500, json={"error": "boom"})

        with pytest.raises(SummarizerHTTPError) as exc_info:
            await make_client(handler).summarize([coffee])
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_missing_summary_field(self, make_client, coffee):
        def handler(request):
            return httpx.Response(200, json={"text": "no summary here"})

        with pytest.raises(SummarizerResponseError):
            await make_client(handler).summarize([coffee])

    @pytest.mark.asyncio
    async def test_body_not_json(self, make_client, coffee):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(SummarizerResponseError):
            await make_client(handler).summarize([coffee])

    @pytest.mark.asyncio
    async def test_network_error(self, make_client, coffee):
        """Test transport errors are wrapped in SummarizerError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SummarizerError):
            await make_client(handler).summarize([coffee])

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self, make_client, coffee):
        """Test a single attempt is made unless retries are configured."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SummarizerError):
            await make_client(handler).summarize([coffee])
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_retry_on_network_error(self, make_client, coffee):
        """Test configured retries recover from a transient network error."""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection reset", request=request)
            return httpx.Response(200, json={"summary": "second time lucky"})

        settings = SummarizerSettings(
            api_url="https://summarizer.test/v1/summarize",
            api_key="test-key",
            max_attempts=2,
        )
        client = make_client(handler, settings=settings)

        assert await client.summarize([coffee]) == "second time lucky"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_http_errors_not_retried(self, make_client, coffee):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        settings = SummarizerSettings(
            api_url="https://summarizer.test/v1/summarize",
            api_key="test-key",
            max_attempts=3,
        )
        with pytest.raises(SummarizerHTTPError):
            await make_client(handler, settings=settings).summarize([coffee])
        assert len(calls) == 1
