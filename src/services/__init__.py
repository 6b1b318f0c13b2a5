"""Services package."""

from src.services.summarizer import (
    SummarizerClient,
    SummarizerError,
    SummarizerHTTPError,
    SummarizerNotConfiguredError,
    SummarizerResponseError,
    format_expenses_text,
)

__all__ = [
    # Summarization
    "SummarizerClient",
    "SummarizerError",
    "SummarizerHTTPError",
    "SummarizerNotConfiguredError",
    "SummarizerResponseError",
    "format_expenses_text",
]
