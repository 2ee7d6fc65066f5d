"""
Wait for a PaymentIntent to settle.

A fixed number of attempts with a fixed delay between them. The loop is a
plain coroutine, so cancelling the task that runs it stops it at the next
sleep or fetch. Exhausting the attempts is not an error: the payment may
still settle later, and the result says so.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from kove.models.payment import PaymentIntentInfo, PollOutcome, PollResult, TERMINAL_STATUSES

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 20
DEFAULT_DELAY_SECONDS = 1.5

FetchStatus = Callable[[str], Awaitable[PaymentIntentInfo]]


async def poll_payment_intent(
    fetch_status: FetchStatus,
    payment_intent_id: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
) -> PollResult:
    """
    Poll ``fetch_status`` until the intent reaches a terminal status.

    Returns ``resolved`` with the terminal status, ``pending`` with the last
    status seen when attempts run out, or ``error`` if a fetch raised.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_status = None
    for attempt in range(1, max_attempts + 1):
        await asyncio.sleep(delay_seconds)
        try:
            info = await fetch_status(payment_intent_id)
        except Exception as e:
            logger.warning("Status check %d for %s failed: %s", attempt, payment_intent_id, e)
            return PollResult(
                outcome=PollOutcome.ERROR,
                payment_intent_id=payment_intent_id,
                status=last_status,
                attempts=attempt,
                error=str(e),
            )

        last_status = info.status
        if info.status in TERMINAL_STATUSES:
            logger.info("PaymentIntent %s settled as %s after %d checks", payment_intent_id, info.status, attempt)
            return PollResult(
                outcome=PollOutcome.RESOLVED,
                payment_intent_id=payment_intent_id,
                status=info.status,
                attempts=attempt,
            )

    logger.info("PaymentIntent %s still %s after %d checks", payment_intent_id, last_status, max_attempts)
    return PollResult(
        outcome=PollOutcome.PENDING,
        payment_intent_id=payment_intent_id,
        status=last_status,
        attempts=max_attempts,
    )
