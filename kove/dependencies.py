"""
FastAPI dependencies shared by the routers.

Services are wired onto ``app.state`` during the lifespan; tests may set
``app.state.clock`` or override ``get_clock`` to freeze time.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from kove.services.clock import Clock, utc_now
from kove.services.tickets import TicketService


def get_clock(request: Request) -> Clock:
    return getattr(request.app.state, "clock", None) or utc_now


def get_ticket_service(request: Request) -> TicketService:
    service = getattr(request.app.state, "ticket_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Ticket service is not configured")
    return service
