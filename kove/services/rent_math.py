"""
Rent calculators — Pure Business Logic

Early/autopay discount and grace-period overdue checks. Both take the
current time explicitly so results are deterministic under test.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from kove.errors import InvalidInputError, ValidationError
from kove.models.rent import DiscountReason, DiscountResult, OverdueResult
from kove.services.clock import TimestampLike, parse_timestamp

# 1% discount, expressed in basis points to keep the math integral
DISCOUNT_BASIS_POINTS = 100
DISCOUNT_LEAD_TIME = timedelta(days=3)
DEFAULT_GRACE_DAYS = 3
ONE_DAY = timedelta(days=1)


def compute_discount(
    rent_amount: Optional[int],
    due: Optional[TimestampLike],
    autopay_enabled_at: Optional[TimestampLike] = None,
    paid_at: Optional[TimestampLike] = None,
    *,
    now: datetime,
) -> DiscountResult:
    """
    Compute the 1% rent discount for paying (or enabling autopay) early.

    The discount applies when rent is paid, or autopay was enabled, at
    least three days before the due date. The two rules never stack:
    when both qualify the reason is ``early`` and the amount is still 1%.

    Missing rent or due date short-circuits to ``missing_inputs``.
    """
    if not rent_amount or not due:
        return DiscountResult(discount=0, reason=DiscountReason.MISSING_INPUTS)
    if rent_amount < 0:
        raise ValidationError("rentAmount must be positive")

    due_at = parse_timestamp(due, field="dueTimestamp")
    try:
        threshold = due_at - DISCOUNT_LEAD_TIME
    except OverflowError:
        raise InvalidInputError("invalid_dueTimestamp: out of range") from None

    paid = parse_timestamp(paid_at, field="paidAt") if paid_at else now
    autopay = parse_timestamp(autopay_enabled_at, field="autopayEnabledAt") if autopay_enabled_at else None

    qualifies_early = paid <= threshold
    qualifies_autopay = autopay is not None and autopay <= threshold

    if not (qualifies_early or qualifies_autopay):
        return DiscountResult(discount=0, reason=DiscountReason.NONE)

    discount = rent_amount * DISCOUNT_BASIS_POINTS // 10_000
    if discount == 0:
        return DiscountResult(discount=0, reason=DiscountReason.NONE)

    reason = DiscountReason.EARLY if qualifies_early else DiscountReason.AUTOPAY
    return DiscountResult(discount=discount, reason=reason)


def compute_overdue(
    due: TimestampLike,
    grace_days: int = DEFAULT_GRACE_DAYS,
    *,
    now: datetime,
) -> OverdueResult:
    """
    Decide whether a balance due at ``due`` is overdue at ``now``.

    The cutoff is ``due + grace_days``. Once past it, every started day
    counts: one millisecond past the cutoff is one day past due, exactly
    six days past it is six.
    """
    if grace_days < 0:
        raise InvalidInputError("invalid_graceDays: must not be negative")

    due_at = parse_timestamp(due, field="dueTimestamp")
    try:
        cutoff = due_at + grace_days * ONE_DAY
    except OverflowError:
        raise InvalidInputError("invalid_dueTimestamp: out of range") from None

    if now > cutoff:
        days_past_due = -((cutoff - now) // ONE_DAY)
        return OverdueResult(is_overdue=True, days_past_due=days_past_due, cutoff=cutoff)
    return OverdueResult(is_overdue=False, days_past_due=0, cutoff=cutoff)


def format_amount(amount: int) -> str:
    """Render minor units as dollars, e.g. 150000 -> ``$1500.00``."""
    return f"${amount / 100:.2f}"


def overdue_messages(amount: int) -> dict[str, str]:
    """Neutral reminder templates for an open balance."""
    display = format_amount(amount)
    return {
        "reminder": (
            f"Friendly reminder: {display} for this month’s rent appears open. "
            "Would you like a link to pay now or set up autopay?"
        ),
        "planOffer": (
            "If helpful, we can set up a one-time plan for this month. "
            "Let me know what works and I’ll pass it along."
        ),
        "statusCheck": (
            "Checking in on rent for this month. If you’ve already paid, thank you. "
            "Please ignore this note and feel free to send the receipt."
        ),
        "lateFeeInfo": (
            "Heads up: the lease mentions a late fee after the grace period. "
            "If you’d like details, I can share the exact clause."
        ),
    }
