"""
Overdue rent check.

Returns the grace-period verdict plus neutral message templates the chat
UI can offer the landlord.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from kove.config import get_settings
from kove.dependencies import get_clock
from kove.errors import InvalidInputError
from kove.models.rent import OverdueCheckRequest
from kove.services.clock import Clock, to_iso
from kove.services.rent_math import compute_overdue, overdue_messages

router = APIRouter(prefix="/v1/overdue", tags=["rent"])


@router.post("/check")
async def check_overdue(
    body: Optional[OverdueCheckRequest] = None,
    clock: Clock = Depends(get_clock),
):
    """Body: ``{"amount": int, "dueTimestamp": str, "graceDays"?: int}``."""
    body = body or OverdueCheckRequest()
    if not body.amount or not body.due_timestamp:
        raise HTTPException(status_code=400, detail="amount and dueTimestamp are required")

    grace_days = body.grace_days if body.grace_days is not None else get_settings().default_grace_days
    try:
        result = compute_overdue(body.due_timestamp, grace_days, now=clock())
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "isOverdue": result.is_overdue,
        "daysPastDue": result.days_past_due,
        "cutoffTimestamp": to_iso(result.cutoff),
        "amount": body.amount,
        "messages": overdue_messages(body.amount),
    }
