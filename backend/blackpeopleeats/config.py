"""
BlackPeopleEats Backend — Application Configuration
=====================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.

Integrations are optional:
    Neither Stripe nor Gemini is required to boot. Without STRIPE_SECRET_KEY
    the checkout route answers with a mock URL; without GEMINI_API_KEY the
    highlights route serves the static fallback table. Startup only logs
    which integrations run in that degraded mode.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


MOCK_CHECKOUT_URL = "https://checkout.stripe.com/pay/mock_session?reason=no_key"

# Value shipped in the sample .env; treated the same as no key
GEMINI_KEY_PLACEHOLDER = "your_gemini_api_key_here"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///./file.db or postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///./blackpeopleeats.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing applies to server databases only; SQLite ignores it
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # What: Create missing tables and load the starter dataset at startup
    auto_create_schema: bool = Field(default=True)
    seed_on_startup: bool = Field(default=True)

    # What: Tenacity settings for waiting on the database during startup
    startup_retry_attempts: int = Field(default=5, ge=1, le=30)
    startup_retry_wait: int = Field(default=2, ge=1, le=30)

    # ── Google Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key for city highlights and search",
    )
    gemini_model: str = Field(default="gemini-2.5-flash")

    # What: City used for highlights when the caller names none, and the
    # fallback table row served for cities the table does not know
    default_city: str = Field(default="Atlanta")

    # ── Stripe ────────────────────────────────────────────────────────────
    stripe_secret_key: str = Field(
        default="",
        description="Stripe secret key; empty means checkout returns a mock URL",
    )

    # What: Public base URL of the web app, used for checkout redirect targets
    app_url: str = Field(default="http://localhost:3000")

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("app_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key) and self.gemini_api_key != GEMINI_KEY_PLACEHOLDER

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def validate_optional_integrations(self) -> List[str]:
        """
        What:  Lists the integrations that will run in degraded mode.
        When:  Called during app startup (lifespan) so the log explains
               why checkout returns a mock URL or highlights never change.
        """
        warnings = []
        if not self.gemini_configured:
            warnings.append(
                "GEMINI_API_KEY is not set; city highlights will use the static fallback table"
            )
        if not self.stripe_configured:
            warnings.append(
                "STRIPE_SECRET_KEY is not set; checkout sessions will return a mock URL"
            )
        return warnings


settings = Settings()
