"""
BlackPeopleEats Backend — Settings Tests
==========================================

What:  Derived properties and validators on Settings.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from blackpeopleeats.config import GEMINI_KEY_PLACEHOLDER, Settings


class TestIntegrationFlags:
    """Tests for the optional-integration switches."""

    def test_empty_gemini_key_is_unconfigured(self):
        """An empty key disables Gemini."""
        assert Settings(gemini_api_key="").gemini_configured is False

    def test_placeholder_gemini_key_is_unconfigured(self):
        """The sample .env value must not be sent to Gemini as a key."""
        assert Settings(gemini_api_key=GEMINI_KEY_PLACEHOLDER).gemini_configured is False

    def test_real_gemini_key_is_configured(self):
        """Any other non-empty key enables Gemini."""
        assert Settings(gemini_api_key="AIza-test").gemini_configured is True

    def test_degraded_integrations_are_reported(self):
        """Both missing keys produce one warning each."""
        warnings = Settings(gemini_api_key="", stripe_secret_key="").validate_optional_integrations()
        assert len(warnings) == 2
        assert any("GEMINI_API_KEY" in w for w in warnings)
        assert any("STRIPE_SECRET_KEY" in w for w in warnings)


class TestDatabaseUrl:
    """Tests for store detection from DATABASE_URL."""

    def test_sqlite_url(self):
        """SQLite URLs are detected by scheme."""
        assert Settings(database_url="sqlite+aiosqlite:///./x.db").is_sqlite is True

    def test_postgres_url(self):
        """PostgreSQL runs migrations without batch mode."""
        settings = Settings(database_url="postgresql+asyncpg://bpe:bpe@db/bpe")
        assert settings.is_sqlite is False


class TestValidators:
    """Tests for field validators."""

    def test_log_level_is_upper_cased(self):
        """Log level names are accepted in any case."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_is_rejected(self):
        """Unknown level names fail at startup."""
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")

    def test_app_url_trailing_slash_is_stripped(self):
        """Checkout redirect URLs are built as f"{app_url}/?success=true"."""
        assert Settings(app_url="https://bpe.example.com/").app_url == "https://bpe.example.com"

    def test_cors_origins_are_split(self):
        """Comma-separated origins are trimmed and blanks dropped."""
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
