"""
Payment endpoints.

Rent payments with the early/autopay incentive, plus the test-mode
PaymentIntent routes the chat UI uses for its "Pay rent (Card/ACH)" actions
and status polling.

These handlers are plain ``def``: the processor client is blocking, so
FastAPI runs them in its thread pool.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from kove.dependencies import get_clock
from kove.errors import InvalidInputError, PaymentIntentNotFoundError, PaymentProcessorError, ValidationError
from kove.models.payment import PaymentMethod
from kove.models.rent import RentIntentRequest
from kove.services import payments
from kove.services.clock import Clock, to_iso
from kove.services.rent_math import compute_discount

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["payments"])

# Fixed demo amounts for the test routes
TEST_CARD_AMOUNT = 2000
TEST_ACH_AMOUNT = 5000


# ═══════════════════════════════════════════════════════════════════
# POST /v1/payments/rent_intent: Pay rent with incentive
# ═══════════════════════════════════════════════════════════════════

@router.post("/payments/rent_intent")
def create_rent_intent(
    body: Optional[RentIntentRequest] = None,
    clock: Clock = Depends(get_clock),
):
    """
    Charge rent minus any early/autopay discount.

    Body: ``{"rentAmount": int, "dueTimestamp": str, "autopayEnabledAt"?: str,
    "paidAt"?: str}`` (``rentCents``/``dueDateISO``/``autopayEnabledAtISO``/
    ``simulatePaidAtISO`` are accepted too). ``paidAt`` simulates the payment
    time; it defaults to now.
    """
    body = body or RentIntentRequest()
    if not body.rent_amount or not body.due_timestamp:
        raise HTTPException(status_code=400, detail="rentAmount and dueTimestamp are required")

    now = clock()
    try:
        result = compute_discount(
            body.rent_amount,
            body.due_timestamp,
            body.autopay_enabled_at,
            body.paid_at,
            now=now,
        )
    except (ValidationError, InvalidInputError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    total = max(0, body.rent_amount - result.discount)

    try:
        intent = payments.create_payment_intent(total, method=PaymentMethod.CARD)
    except PaymentProcessorError as e:
        logger.error("rent_intent error: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "paymentIntentId": intent.id,
        "status": intent.status,
        "discount": result.discount,
        "reason": result.reason.value,
        "total": total,
        "receipt": {
            "rentAmount": body.rent_amount,
            "discountAmount": result.discount,
            "discountReason": result.reason.value,
            "totalAmount": total,
            "dueTimestamp": body.due_timestamp,
            "autopayEnabledAt": body.autopay_enabled_at,
            "paidAt": body.paid_at or to_iso(now),
        },
    }


# ═══════════════════════════════════════════════════════════════════
# Test-mode PaymentIntents
# ═══════════════════════════════════════════════════════════════════

@router.post("/test/payment_intent")
def create_test_card_payment():
    """Create a confirmed $20 card PaymentIntent (no redirects)."""
    return _create_test_payment(TEST_CARD_AMOUNT, PaymentMethod.CARD)


@router.post("/test/payment_intent_ach")
def create_test_ach_payment():
    """Create a confirmed $50 ACH PaymentIntent."""
    return _create_test_payment(TEST_ACH_AMOUNT, PaymentMethod.ACH)


def _create_test_payment(amount: int, method: PaymentMethod) -> dict:
    try:
        intent = payments.create_payment_intent(amount, method=method)
    except PaymentProcessorError as e:
        logger.error("Create %s PaymentIntent error: %s", method.value, e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"id": intent.id, "status": intent.status}


@router.get("/test/payment_intent/{payment_intent_id}")
def get_payment_intent(payment_intent_id: str):
    """PaymentIntent status, polled by the chat UI after a payment."""
    try:
        intent = payments.retrieve_payment_intent(payment_intent_id)
    except PaymentIntentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaymentProcessorError as e:
        # the processor reports unknown ids as request errors too
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "id": intent.id,
        "status": intent.status,
        "latestCharge": intent.latest_charge,
        "nextAction": intent.next_action,
    }
