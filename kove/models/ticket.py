"""
Pydantic models for maintenance tickets.

Field aliases are camelCase to match the JSON the chat UI consumes
(``createdAt``, ``updatedAt``); ``populate_by_name`` lets Python code
use the snake_case names.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# ═══════════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════════

class TicketStatus(str, Enum):
    """Progress states for a maintenance ticket."""
    NEW = "new"
    ACKNOWLEDGED = "acknowledged"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    COMPLETED = "completed"
    REOPENED = "reopened"

    @property
    def stage(self) -> str:
        """Display label, e.g. ``in_progress`` -> ``In_Progress``."""
        return "_".join(part.capitalize() for part in self.value.split("_"))


class TicketAction(str, Enum):
    """Commands accepted by the command workflow."""
    ACK = "ack"
    SCHEDULE = "schedule"
    START = "start"
    WAIT = "wait"
    COMPLETE = "complete"
    REOPEN = "reopen"


# ═══════════════════════════════════════════════════════════════════
# Ticket
# ═══════════════════════════════════════════════════════════════════

class TicketEvent(BaseModel):
    """One entry in a ticket's append-only history."""
    timestamp: datetime
    note: str
    stage: str


class Ticket(BaseModel):
    """A maintenance request and its progress history."""
    id: str
    summary: str = Field(..., min_length=1)
    status: TicketStatus = TicketStatus.NEW
    assigned: Optional[str] = None
    eta: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    events: list[TicketEvent] = []

    model_config = {"populate_by_name": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stage(self) -> str:
        return self.status.stage


# ═══════════════════════════════════════════════════════════════════
# API Request Models
# ═══════════════════════════════════════════════════════════════════

class TicketCreateRequest(BaseModel):
    """Request body for creating a ticket."""
    summary: Optional[str] = None


class TicketAdvanceRequest(BaseModel):
    """
    Request body for advancing a ticket.

    ``action`` is kept as a plain string so unknown commands reach the
    workflow and are reported as such rather than as a schema error.
    """
    action: Optional[str] = None
    assigned: Optional[str] = None
    eta: Optional[str] = None
