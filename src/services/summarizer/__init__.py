"""Summarization service package."""

from src.services.summarizer.client import (
    SummarizerClient,
    SummarizerError,
    SummarizerHTTPError,
    SummarizerNotConfiguredError,
    SummarizerResponseError,
    format_expenses_text,
)

__all__ = [
    "SummarizerClient",
    "SummarizerError",
    "SummarizerHTTPError",
    "SummarizerNotConfiguredError",
    "SummarizerResponseError",
    "format_expenses_text",
]
