"""
Pydantic models for payment intents and status polling.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CARD = "card"
    ACH = "ach"


# Statuses after which a PaymentIntent will not change without user action
TERMINAL_STATUSES = frozenset({"succeeded", "requires_payment_method", "canceled"})


class PaymentIntentInfo(BaseModel):
    """The subset of a processor PaymentIntent this API exposes."""
    id: str
    status: str
    amount: int = 0
    currency: str = "usd"
    latest_charge: Optional[str] = Field(None, alias="latestCharge")
    next_action: Optional[dict[str, Any]] = Field(None, alias="nextAction")

    model_config = {"populate_by_name": True}

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class PollOutcome(str, Enum):
    RESOLVED = "resolved"
    PENDING = "pending"
    ERROR = "error"


class PollResult(BaseModel):
    """Result of waiting on a PaymentIntent to settle."""
    outcome: PollOutcome
    payment_intent_id: str = Field(..., alias="paymentIntentId")
    status: Optional[str] = None
    attempts: int = 0
    error: Optional[str] = None

    model_config = {"populate_by_name": True}
