"""Tests for environment configuration."""

import pytest
from pydantic import ValidationError

from src.config import AppSettings, SummarizerSettings, get_settings, validate_all_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSummarizerSettings:

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SUMMARIZER_API_URL", "https://api.example.com/summarize")
        monkeypatch.setenv("SUMMARIZER_API_KEY", "secret")
        monkeypatch.setenv("SUMMARIZER_TIMEOUT_SECONDS", "5")

        settings = SummarizerSettings()

        assert settings.api_url == "https://api.example.com/summarize"
        assert settings.api_key == "secret"
        assert settings.timeout_seconds == 5.0
        assert settings.max_attempts == 1

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("SUMMARIZER_API_URL", raising=False)
        monkeypatch.delenv("SUMMARIZER_API_KEY", raising=False)

        with pytest.raises(ValidationError):
            SummarizerSettings(_env_file=None)

    def test_rejects_non_http_url(self):
        with pytest.raises(ValidationError):
            SummarizerSettings(api_url="ftp://example.com", api_key="k")

    def test_max_attempts_bounds(self):
        with pytest.raises(ValidationError):
            SummarizerSettings(api_url="https://x.test", api_key="k", max_attempts=0)


class TestAppSettings:

    def test_defaults(self, monkeypatch):
        for name in ("CURRENCY_SYMBOL", "DEBUG_MODE", "FUTURE_DATE_TOLERANCE_DAYS"):
            monkeypatch.delenv(name, raising=False)

        settings = AppSettings(_env_file=None)

        assert settings.currency_symbol == "₹"
        assert settings.debug_mode is False
        assert settings.log_level == "INFO"
        assert settings.future_date_tolerance_days == 7

    def test_debug_log_level(self):
        assert AppSettings(debug_mode=True).log_level == "DEBUG"


class TestValidateAllSettings:

    def test_summarizer_not_configured(self, monkeypatch):
        monkeypatch.delenv("SUMMARIZER_API_URL", raising=False)
        monkeypatch.delenv("SUMMARIZER_API_KEY", raising=False)
        monkeypatch.chdir("/")  # no .env file here

        status = validate_all_settings()

        assert status["summarizer"] is False
        assert "summarizer_error" in status
        assert status["app"] is True

    def test_summarizer_configured(self, monkeypatch):
        monkeypatch.setenv("SUMMARIZER_API_URL", "https://api.example.com/summarize")
        monkeypatch.setenv("SUMMARIZER_API_KEY", "secret")

        status = validate_all_settings()

        assert status["summarizer"] is True
