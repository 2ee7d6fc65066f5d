"""
Maintenance ticket endpoints.

Backs the maintenance card in the chat UI: open a ticket, show it, and
move it along as the landlord acts on it.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from kove.dependencies import get_ticket_service
from kove.errors import TicketNotFoundError, UnknownActionError, ValidationError
from kove.models.ticket import Ticket, TicketAdvanceRequest, TicketCreateRequest
from kove.services.tickets import TicketService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/tickets", tags=["tickets"])


# ═══════════════════════════════════════════════════════════════════
# POST /v1/tickets: Open a ticket
# ═══════════════════════════════════════════════════════════════════

@router.post("", response_model=Ticket)
async def create_ticket(
    body: Optional[TicketCreateRequest] = None,
    service: TicketService = Depends(get_ticket_service),
):
    """Create a ticket in the initial state. 400 when the summary is blank."""
    try:
        ticket = service.create_ticket(body.summary if body else None)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Ticket %s created.", ticket.id)
    return ticket


# ═══════════════════════════════════════════════════════════════════
# GET /v1/tickets: List tickets (oldest first)
# ═══════════════════════════════════════════════════════════════════

@router.get("", response_model=list[Ticket])
async def list_tickets(service: TicketService = Depends(get_ticket_service)):
    return service.list_tickets()


# ═══════════════════════════════════════════════════════════════════
# GET /v1/tickets/{ticket_id}
# ═══════════════════════════════════════════════════════════════════

@router.get("/{ticket_id}", response_model=Ticket)
async def get_ticket(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    try:
        return service.get_ticket(ticket_id)
    except TicketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ═══════════════════════════════════════════════════════════════════
# POST /v1/tickets/{ticket_id}/advance
# ═══════════════════════════════════════════════════════════════════

@router.post("/{ticket_id}/advance", response_model=Ticket)
async def advance_ticket(
    ticket_id: str,
    body: Optional[TicketAdvanceRequest] = None,
    service: TicketService = Depends(get_ticket_service),
):
    """
    Move a ticket one step.

    Body (command workflow): ``{"action": "ack" | "schedule" | "start" |
    "wait" | "complete" | "reopen", "assigned"?: str, "eta"?: str}``.
    The linear workflow ignores the body.
    """
    body = body or TicketAdvanceRequest()
    try:
        return service.advance_ticket(
            ticket_id,
            body.action,
            assigned=body.assigned,
            eta=body.eta,
        )
    except TicketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownActionError as e:
        raise HTTPException(status_code=400, detail=str(e))
