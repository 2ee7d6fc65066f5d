"""
Pydantic models for rent discounts and overdue checks.

Request models accept both the descriptive field names (``rentAmount``,
``dueTimestamp``) and the names the chat UI sends (``rentCents``,
``dueDateISO``) via AliasChoices. Amounts are integer minor units (cents).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


# ═══════════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════════

class DiscountReason(str, Enum):
    NONE = "none"
    EARLY = "early"
    AUTOPAY = "autopay"
    MISSING_INPUTS = "missing_inputs"


# ═══════════════════════════════════════════════════════════════════
# Calculator results
# ═══════════════════════════════════════════════════════════════════

class DiscountResult(BaseModel):
    """Outcome of the early/autopay discount rule."""
    discount: int = Field(0, ge=0)
    reason: DiscountReason = DiscountReason.NONE


class OverdueResult(BaseModel):
    """Outcome of the grace-period check."""
    is_overdue: bool = Field(..., alias="isOverdue")
    days_past_due: int = Field(0, ge=0, alias="daysPastDue")
    cutoff: datetime

    model_config = {"populate_by_name": True}


# ═══════════════════════════════════════════════════════════════════
# API Request Models
# ═══════════════════════════════════════════════════════════════════

class RentIntentRequest(BaseModel):
    """Request body for POST /v1/payments/rent_intent."""
    rent_amount: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("rentAmount", "rentCents", "rent_amount"),
    )
    due_timestamp: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("dueTimestamp", "dueDateISO", "due_timestamp"),
    )
    autopay_enabled_at: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("autopayEnabledAt", "autopayEnabledAtISO", "autopay_enabled_at"),
    )
    paid_at: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("paidAt", "simulatePaidAtISO", "paid_at"),
    )


class OverdueCheckRequest(BaseModel):
    """Request body for POST /v1/overdue/check."""
    amount: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("amount", "amountCents"),
    )
    due_timestamp: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("dueTimestamp", "dueDateISO", "due_timestamp"),
    )
    grace_days: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("graceDays", "grace_days"),
    )
