"""
In-memory ticket store.

A dict-based backend for the ``TicketStore`` interface. Tickets live for the
lifetime of the process; nothing is persisted. Insertion order of the dict is
the listing order.

FastAPI runs sync endpoints in a thread pool, so every access to the table
goes through a lock. Tickets are copied in and out; callers never hold a
reference to the stored object.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from kove.models.ticket import Ticket

logger = logging.getLogger(__name__)


class InMemoryTicketStore:
    """Dict-backed ticket table guarded by a lock."""

    def __init__(self) -> None:
        self._tickets: dict[str, Ticket] = {}
        self._lock = threading.Lock()

    # ═══════════════════════════════════════════════════════════════
    # Initialization / Cleanup
    # ═══════════════════════════════════════════════════════════════

    def initialize(self) -> None:
        """No-op init for in-memory store."""
        logger.info("In-memory ticket store initialized.")

    def close(self) -> None:
        """Clear in-memory storage."""
        with self._lock:
            self._tickets.clear()
        logger.info("In-memory ticket store cleared.")

    # ═══════════════════════════════════════════════════════════════
    # Ticket CRUD
    # ═══════════════════════════════════════════════════════════════

    def create(self, ticket: Ticket) -> Ticket:
        """Store a new ticket. Raises ValueError if the id is taken."""
        with self._lock:
            if ticket.id in self._tickets:
                raise ValueError(f"Ticket {ticket.id} already exists")
            self._tickets[ticket.id] = ticket.model_copy(deep=True)
            total = len(self._tickets)
        logger.info("In-memory: created ticket %s (total: %d)", ticket.id, total)
        return ticket.model_copy(deep=True)

    def get(self, ticket_id: str) -> Optional[Ticket]:
        with self._lock:
            stored = self._tickets.get(ticket_id)
            return stored.model_copy(deep=True) if stored else None

    def list(self) -> list[Ticket]:
        """All tickets, oldest first."""
        with self._lock:
            return [t.model_copy(deep=True) for t in self._tickets.values()]

    def update(self, ticket: Ticket) -> Optional[Ticket]:
        """Replace a stored ticket. Returns None if it does not exist."""
        with self._lock:
            if ticket.id not in self._tickets:
                logger.warning("In-memory: ticket %s not found for update.", ticket.id)
                return None
            self._tickets[ticket.id] = ticket.model_copy(deep=True)
        logger.info("In-memory: updated ticket %s", ticket.id)
        return ticket.model_copy(deep=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tickets)
