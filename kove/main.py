"""
FastAPI application entry point for the Kove lease-thread API.

Configures:
  • CORS middleware for the chat UI
  • Lifespan events for the ticket store and payment client
  • API routers for tickets, payments and overdue checks
  • Health check endpoint
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kove.config import get_settings
from kove.routers import overdue, payments, tickets
from kove.services import payments as payment_client
from kove.services import storage
from kove.services.clock import to_iso, utc_now
from kove.services.ticket_workflow import get_workflow
from kove.services.tickets import TicketService

VERSION = "0.1.0"

# ═══════════════════════════════════════════════════════════════════
# Logging
# ═══════════════════════════════════════════════════════════════════

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# Lifespan: startup / shutdown
# ═══════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""
    settings = get_settings()
    logger.info("Starting Kove API (env=%s)...", settings.app_env)

    if settings.payments_configured:
        logger.info("✅ Payment processor key loaded: %s", settings.masked_stripe_key)
    else:
        logger.warning("⚠️  Payment processor key missing — using simulated PaymentIntents.")

    storage.initialize()
    workflow = get_workflow(settings.ticket_workflow)
    app.state.ticket_service = TicketService(storage.get_store(), workflow)
    logger.info("Ticket workflow: %s", workflow.name)

    logger.info("🚀 Kove API ready.")

    yield

    logger.info("Shutting down Kove API...")
    storage.close()
    payment_client.reset_simulation()
    logger.info("Shutdown complete.")


# ═══════════════════════════════════════════════════════════════════
# App Creation
# ═══════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Kove — Lease Thread API",
        description=(
            "Rent payments with early/autopay incentives, overdue checks "
            "and maintenance tickets for the lease-thread chat."
        ),
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tickets.router)
    app.include_router(payments.router)
    app.include_router(overdue.router)

    @app.get("/v1/health", tags=["health"])
    async def health_check():
        """Liveness plus a summary of how the service is wired."""
        current = get_settings()
        return {
            "ok": True,
            "ts": to_iso(utc_now()),
            "service": "kove-api",
            "version": VERSION,
            "environment": current.app_env,
            "paymentProcessor": "configured" if current.payments_configured else "simulated",
            "ticketWorkflow": current.ticket_workflow,
        }

    return app


app = create_app()
