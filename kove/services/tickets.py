"""
Ticket service — create, read and advance maintenance tickets.

Holds no state of its own beyond a lock: tickets live in the injected
``TicketStore`` and transitions are decided by the injected workflow.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Optional

from kove.errors import TicketNotFoundError, ValidationError
from kove.models.ticket import Ticket, TicketAction, TicketEvent
from kove.services.clock import Clock, utc_now
from kove.services.storage import TicketStore
from kove.services.ticket_workflow import CommandWorkflow, LinearWorkflow, TicketWorkflow

logger = logging.getLogger(__name__)

_ID_ATTEMPTS = 5


def new_ticket_id() -> str:
    return f"T-{uuid.uuid4().hex[:10]}"


class TicketService:
    """High level orchestration for ticket lifecycle operations."""

    def __init__(
        self,
        store: TicketStore,
        workflow: TicketWorkflow = CommandWorkflow,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.workflow = workflow
        self.clock = clock
        self._lock = threading.Lock()

    def create_ticket(self, summary: Optional[str]) -> Ticket:
        text = (summary or "").strip()
        if not text:
            raise ValidationError("summary required")

        now = self.clock()
        status = self.workflow.initial_state()
        for _ in range(_ID_ATTEMPTS):
            ticket = Ticket(
                id=new_ticket_id(),
                summary=text,
                status=status,
                created_at=now,
                updated_at=now,
                events=[TicketEvent(timestamp=now, note="Ticket created", stage=status.stage)],
            )
            try:
                return self.store.create(ticket)
            except ValueError:
                logger.warning("Ticket id collision on %s, regenerating.", ticket.id)
        raise RuntimeError("Could not allocate a unique ticket id")

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self.store.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def list_tickets(self) -> list[Ticket]:
        return self.store.list()

    def advance_ticket(
        self,
        ticket_id: str,
        action: Optional[str] = None,
        *,
        assigned: Optional[str] = None,
        eta: Optional[str] = None,
    ) -> Ticket:
        """
        Apply one workflow step to a ticket.

        Raises TicketNotFoundError for unknown ids and UnknownActionError
        when the command workflow does not recognise ``action``. In the
        linear workflow a completed ticket is returned unchanged.
        """
        with self._lock:
            ticket = self.get_ticket(ticket_id)
            new_status = self.workflow.next_status(ticket.status, action)

            if self.workflow is LinearWorkflow and new_status == ticket.status:
                return ticket

            # never let the history run backwards if the clock does
            now = max(self.clock(), ticket.updated_at)
            ticket.status = new_status
            if self.workflow is CommandWorkflow and action == TicketAction.SCHEDULE.value:
                if assigned:
                    ticket.assigned = assigned
                if eta:
                    ticket.eta = eta
            ticket.updated_at = now
            ticket.events.append(TicketEvent(timestamp=now, note=f"Moved to {new_status.stage}", stage=new_status.stage))

            updated = self.store.update(ticket)
            if updated is None:
                raise TicketNotFoundError(ticket_id)

        logger.info("Ticket %s -> %s (action=%s)", ticket_id, new_status.value, action)
        return updated
