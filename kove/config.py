"""
Application configuration loaded from environment variables.

Uses pydantic-settings for typed, validated configuration with .env file support.
Accepts both the processor-specific env var names (STRIPE_SECRET_KEY) and the
generic ones (PAYMENT_SECRET_KEY) via AliasChoices.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings — loaded from environment variables or .env file."""

    # ── App ──────────────────────────────────────────
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # ── Payment processor ────────────────────────────
    # Accepts STRIPE_SECRET_KEY or PAYMENT_SECRET_KEY
    stripe_secret_key: str = Field(
        default="",
        validation_alias=AliasChoices("stripe_secret_key", "payment_secret_key"),
    )
    stripe_api_base: str = "https://api.stripe.com"
    stripe_api_version: str = "2024-06-20"
    payment_currency: str = "usd"
    payment_timeout_seconds: float = 30.0

    # ── Tickets ──────────────────────────────────────
    # "command" dispatches on explicit actions, "linear" auto-advances.
    ticket_workflow: Literal["command", "linear"] = "command"

    # ── Rent ─────────────────────────────────────────
    default_grace_days: int = Field(default=3, ge=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def payments_configured(self) -> bool:
        """True when a payment processor secret key is set."""
        return bool(self.stripe_secret_key)

    @property
    def masked_stripe_key(self) -> str:
        """First 8 characters of the secret key, safe to log."""
        if not self.stripe_secret_key:
            return ""
        return self.stripe_secret_key[:8] + "…"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
