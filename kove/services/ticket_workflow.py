"""
Ticket workflows: how a ticket moves from one status to the next.

Two flavours share the same interface (``initial_state``, ``next_status``):

  • CommandWorkflow — the chat UI sends an explicit action; any action is
    accepted from any status and "reopen" moves a closed ticket back.
  • LinearWorkflow — legacy mode; each advance steps one status forward
    along new → acknowledged → scheduled → in_progress → completed.
"""

from __future__ import annotations

from typing import Optional, Union

from kove.errors import UnknownActionError
from kove.models.ticket import TicketAction, TicketStatus


class CommandWorkflow:
    """Dispatch explicit actions (the buttons in the chat UI) to statuses."""

    name = "command"

    _TRANSITIONS: dict[TicketAction, TicketStatus] = {
        TicketAction.ACK: TicketStatus.ACKNOWLEDGED,
        TicketAction.SCHEDULE: TicketStatus.SCHEDULED,
        TicketAction.START: TicketStatus.IN_PROGRESS,
        TicketAction.WAIT: TicketStatus.WAITING,
        TicketAction.COMPLETE: TicketStatus.COMPLETED,
        TicketAction.REOPEN: TicketStatus.REOPENED,
    }

    @classmethod
    def initial_state(cls) -> TicketStatus:
        return TicketStatus.NEW

    @classmethod
    def parse_action(cls, action: Union[str, TicketAction, None]) -> TicketAction:
        try:
            return TicketAction(action)
        except ValueError:
            raise UnknownActionError(f"unknown action: {action!r}") from None

    @classmethod
    def next_status(cls, current: TicketStatus, action: Union[str, TicketAction, None] = None) -> TicketStatus:
        return cls._TRANSITIONS[cls.parse_action(action)]


class LinearWorkflow:
    """
    Legacy auto-advance: each call moves one step along a fixed order.

    Completed is terminal and maps to itself. Actions are ignored.
    """

    name = "linear"

    _NEXT: dict[TicketStatus, TicketStatus] = {
        TicketStatus.NEW: TicketStatus.ACKNOWLEDGED,
        TicketStatus.ACKNOWLEDGED: TicketStatus.SCHEDULED,
        TicketStatus.SCHEDULED: TicketStatus.IN_PROGRESS,
        TicketStatus.IN_PROGRESS: TicketStatus.COMPLETED,
        TicketStatus.COMPLETED: TicketStatus.COMPLETED,
        # only reachable through the command workflow; resume the main line
        TicketStatus.WAITING: TicketStatus.IN_PROGRESS,
        TicketStatus.REOPENED: TicketStatus.ACKNOWLEDGED,
    }

    @classmethod
    def initial_state(cls) -> TicketStatus:
        return TicketStatus.NEW

    @classmethod
    def next_status(cls, current: TicketStatus, action: Optional[str] = None) -> TicketStatus:
        return cls._NEXT[current]


TicketWorkflow = Union[type[CommandWorkflow], type[LinearWorkflow]]

_WORKFLOWS: dict[str, TicketWorkflow] = {
    CommandWorkflow.name: CommandWorkflow,
    LinearWorkflow.name: LinearWorkflow,
}


def get_workflow(name: str) -> TicketWorkflow:
    try:
        return _WORKFLOWS[name]
    except KeyError:
        raise ValueError(f"Unknown ticket workflow {name!r}; expected one of {sorted(_WORKFLOWS)}") from None
