"""
Shared fixtures for the test suite.

Provides:
  • mock_settings – Settings with no payment processor key (simulation mode)
  • frozen_now / frozen_clock – a fixed instant for calculators and tickets
  • app / test_client – a fresh FastAPI app per test, lifespan included
  • ticket_service – a TicketService over an empty in-memory store
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest

# ═══════════════════════════════════════════════════════════════════
# Environment: set dummy env vars BEFORE importing app modules
# ═══════════════════════════════════════════════════════════════════

_DUMMY_ENV = {
    "APP_ENV": "test",
    "LOG_LEVEL": "WARNING",
    "CORS_ORIGINS": "http://localhost:5173",
    "STRIPE_SECRET_KEY": "",
    "PAYMENT_SECRET_KEY": "",
    "TICKET_WORKFLOW": "command",
    "DEFAULT_GRACE_DAYS": "3",
}

# Direct assignment so variables from a developer shell don't leak in.
for k, v in _DUMMY_ENV.items():
    os.environ[k] = v


FROZEN_NOW = datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture()
def mock_settings():
    """Settings re-read from the test environment."""
    from kove.config import get_settings
    get_settings.cache_clear()
    settings = get_settings()
    yield settings
    get_settings.cache_clear()


@pytest.fixture()
def frozen_now() -> datetime:
    return FROZEN_NOW


@pytest.fixture()
def frozen_clock(frozen_now):
    return lambda: frozen_now


@pytest.fixture()
def ticket_service(frozen_clock):
    from kove.services.memory_store import InMemoryTicketStore
    from kove.services.tickets import TicketService
    return TicketService(InMemoryTicketStore(), clock=frozen_clock)


@pytest.fixture()
def app(mock_settings):
    from kove.main import create_app
    from kove.services import payments
    payments.reset_simulation()
    return create_app()


@pytest.fixture()
def test_client(app):
    """TestClient with the lifespan run, so the ticket service is wired."""
    from fastapi.testclient import TestClient
    with TestClient(app) as client:
        yield client
