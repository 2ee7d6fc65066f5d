"""
Storage abstraction for tickets.

``TicketStore`` is the interface the ticket service depends on. The only
backend shipped is the in-memory store; a persistent backend only needs to
implement the same four methods plus ``initialize``/``close``.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from kove.models.ticket import Ticket
from kove.services.memory_store import InMemoryTicketStore

logger = logging.getLogger(__name__)


class TicketStore(Protocol):
    def initialize(self) -> None: ...

    def close(self) -> None: ...

    def create(self, ticket: Ticket) -> Ticket: ...

    def get(self, ticket_id: str) -> Optional[Ticket]: ...

    def list(self) -> list[Ticket]: ...

    def update(self, ticket: Ticket) -> Optional[Ticket]: ...


# ═══════════════════════════════════════════════════════════════════
# Backend selection
# ═══════════════════════════════════════════════════════════════════

_store: Optional[TicketStore] = None


def get_store() -> TicketStore:
    """Return the process-wide store, creating the in-memory one on first use."""
    global _store
    if _store is None:
        _store = InMemoryTicketStore()
    return _store


# ── Initialisation / shutdown (called by main.py lifespan) ────────

def initialize() -> None:
    get_store().initialize()


def close() -> None:
    global _store
    if _store is not None:
        _store.close()
        _store = None
