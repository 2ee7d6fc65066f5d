"""
Tests for application configuration (kove.config).

Covers:
  • Default values
  • Property derivation (cors_origins_list, is_development, payments_configured)
  • Secret key aliases and masking
  • Environment variable override
  • get_settings caching
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kove.config import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        # Clear env vars that conftest sets so we test true defaults
        clean_env = {k: v for k, v in os.environ.items() if k.upper() not in (
            "APP_ENV", "LOG_LEVEL", "CORS_ORIGINS", "STRIPE_SECRET_KEY",
            "PAYMENT_SECRET_KEY", "TICKET_WORKFLOW", "DEFAULT_GRACE_DAYS",
        )}
        with patch.dict(os.environ, clean_env, clear=True):
            s = Settings(_env_file=None)  # type: ignore
        assert s.app_env == "development"
        assert s.stripe_api_base == "https://api.stripe.com"
        assert s.payment_currency == "usd"
        assert s.ticket_workflow == "command"
        assert s.default_grace_days == 3
        assert s.payments_configured is False

    def test_cors_origins_list_multiple(self):
        s = Settings(cors_origins="http://a.com, http://b.com , http://c.com", _env_file=None)  # type: ignore
        assert s.cors_origins_list == ["http://a.com", "http://b.com", "http://c.com"]

    def test_cors_origins_list_empty(self):
        s = Settings(cors_origins="", _env_file=None)  # type: ignore
        assert s.cors_origins_list == []

    def test_is_development(self):
        assert Settings(app_env="development", _env_file=None).is_development is True  # type: ignore
        assert Settings(app_env="production", _env_file=None).is_development is False  # type: ignore

    def test_masked_key(self):
        s = Settings(stripe_secret_key="sk_test_abcdefghijkl", _env_file=None)  # type: ignore
        assert s.payments_configured is True
        assert s.masked_stripe_key == "sk_test_…"
        assert "abcdefghijkl" not in s.masked_stripe_key

    def test_masked_key_empty(self):
        s = Settings(stripe_secret_key="", _env_file=None)  # type: ignore
        assert s.masked_stripe_key == ""

    def test_generic_key_alias(self):
        with patch.dict(os.environ, {"STRIPE_SECRET_KEY": "", "PAYMENT_SECRET_KEY": "sk_test_generic"}):
            os.environ.pop("STRIPE_SECRET_KEY")
            s = Settings(_env_file=None)  # type: ignore
        assert s.stripe_secret_key == "sk_test_generic"

    def test_unknown_workflow_rejected(self):
        with pytest.raises(ValidationError):
            Settings(ticket_workflow="kanban", _env_file=None)  # type: ignore

    def test_negative_grace_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_grace_days=-1, _env_file=None)  # type: ignore


class TestGetSettings:
    def test_returns_settings_instance(self, mock_settings):
        assert isinstance(mock_settings, Settings)
        assert mock_settings.app_env == "test"

    def test_caching(self):
        """get_settings should return the same object on repeated calls."""
        get_settings.cache_clear()
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2
        get_settings.cache_clear()

    def test_env_override(self):
        """Environment variables should override defaults."""
        get_settings.cache_clear()
        with patch.dict(os.environ, {"APP_ENV": "staging", "TICKET_WORKFLOW": "linear"}):
            get_settings.cache_clear()
            s = get_settings()
            assert s.app_env == "staging"
            assert s.ticket_workflow == "linear"
        get_settings.cache_clear()
