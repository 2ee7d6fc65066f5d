"""
Tests for the rent calculators (kove.services.rent_math).

Covers:
  • Discount: early, autopay, no stacking, missing inputs, boundaries
  • Overdue: grace period cutoff, day counting, monotonicity in grace days
  • Timestamp parsing errors
  • Message templates
"""

from datetime import datetime, timedelta, timezone

import pytest

from kove.errors import InvalidInputError, ValidationError
from kove.models.rent import DiscountReason
from kove.services.rent_math import (
    compute_discount,
    compute_overdue,
    format_amount,
    overdue_messages,
)

NOW = datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)


# ═══════════════════════════════════════════════════════════════════
# Discount
# ═══════════════════════════════════════════════════════════════════

class TestComputeDiscount:
    def test_paid_four_days_early(self):
        result = compute_discount(
            200000, "2025-01-10T09:00:00Z", paid_at="2025-01-06T09:00:00Z", now=NOW,
        )
        assert result.discount == 2000
        assert result.reason == DiscountReason.EARLY
        assert 200000 - result.discount == 198000

    def test_paid_exactly_three_days_early_qualifies(self):
        result = compute_discount(
            200000, "2025-01-10T09:00:00Z", paid_at="2025-01-07T09:00:00Z", now=NOW,
        )
        assert result.reason == DiscountReason.EARLY

    def test_paid_one_second_late_does_not_qualify(self):
        result = compute_discount(
            200000, "2025-01-10T09:00:00Z", paid_at="2025-01-07T09:00:01Z", now=NOW,
        )
        assert result.discount == 0
        assert result.reason == DiscountReason.NONE

    def test_paid_at_defaults_to_now(self):
        # NOW is 2025-01-10; due a week later
        result = compute_discount(100000, "2025-01-17T00:00:00Z", now=NOW)
        assert result.discount == 1000
        assert result.reason == DiscountReason.EARLY

    def test_autopay_qualifies_when_paying_late(self):
        result = compute_discount(
            150000,
            "2025-01-10T00:00:00Z",
            autopay_enabled_at="2024-12-01T00:00:00Z",
            paid_at="2025-01-09T00:00:00Z",
            now=NOW,
        )
        assert result.discount == 1500
        assert result.reason == DiscountReason.AUTOPAY

    def test_autopay_enabled_too_late(self):
        result = compute_discount(
            150000,
            "2025-01-10T00:00:00Z",
            autopay_enabled_at="2025-01-08T00:00:00Z",
            paid_at="2025-01-09T00:00:00Z",
            now=NOW,
        )
        assert result.discount == 0
        assert result.reason == DiscountReason.NONE

    def test_no_stacking_early_wins(self):
        result = compute_discount(
            200000,
            "2025-01-10T00:00:00Z",
            autopay_enabled_at="2024-12-01T00:00:00Z",
            paid_at="2025-01-01T00:00:00Z",
            now=NOW,
        )
        assert result.discount == 2000
        assert result.reason == DiscountReason.EARLY

    def test_discount_floors_to_whole_cents(self):
        result = compute_discount(
            199999, "2025-01-10T00:00:00Z", paid_at="2025-01-01T00:00:00Z", now=NOW,
        )
        assert result.discount == 1999

    def test_tiny_rent_rounds_to_no_discount(self):
        result = compute_discount(
            99, "2025-01-10T00:00:00Z", paid_at="2025-01-01T00:00:00Z", now=NOW,
        )
        assert result.discount == 0
        assert result.reason == DiscountReason.NONE

    @pytest.mark.parametrize("rent", [0, None])
    def test_missing_rent(self, rent):
        result = compute_discount(rent, "2025-01-10T00:00:00Z", now=NOW)
        assert result.discount == 0
        assert result.reason == DiscountReason.MISSING_INPUTS

    @pytest.mark.parametrize("due", ["", None])
    def test_missing_due(self, due):
        result = compute_discount(200000, due, now=NOW)
        assert result.discount == 0
        assert result.reason == DiscountReason.MISSING_INPUTS

    def test_negative_rent_rejected(self):
        with pytest.raises(ValidationError):
            compute_discount(-100, "2025-01-10T00:00:00Z", now=NOW)

    def test_unparsable_due(self):
        with pytest.raises(InvalidInputError):
            compute_discount(200000, "next tuesday", now=NOW)

    def test_unparsable_paid_at(self):
        with pytest.raises(InvalidInputError):
            compute_discount(200000, "2025-01-10T00:00:00Z", paid_at="yesterday", now=NOW)

    def test_due_at_start_of_calendar_is_out_of_range(self):
        with pytest.raises(InvalidInputError, match="out of range"):
            compute_discount(200000, "0001-01-02T00:00:00Z", now=NOW)

    def test_accepts_datetimes(self):
        due = datetime(2025, 1, 20, tzinfo=timezone.utc)
        result = compute_discount(50000, due, paid_at=due - timedelta(days=5), now=NOW)
        assert result.discount == 500

    def test_naive_timestamps_are_utc(self):
        result = compute_discount(
            200000, "2025-01-10T09:00:00", paid_at="2025-01-07T09:00:00", now=NOW,
        )
        assert result.reason == DiscountReason.EARLY


# ═══════════════════════════════════════════════════════════════════
# Overdue
# ═══════════════════════════════════════════════════════════════════

class TestComputeOverdue:
    def test_worked_example(self):
        result = compute_overdue("2025-01-01T00:00:00Z", 3, now=NOW)
        assert result.is_overdue is True
        assert result.days_past_due == 6
        assert result.cutoff == datetime(2025, 1, 4, tzinfo=timezone.utc)

    def test_within_grace_period(self):
        result = compute_overdue("2025-01-08T00:00:00Z", 3, now=NOW)
        assert result.is_overdue is False
        assert result.days_past_due == 0

    def test_exactly_at_cutoff_is_not_overdue(self):
        result = compute_overdue("2025-01-07T00:00:00Z", 3, now=NOW)
        assert result.is_overdue is False
        assert result.days_past_due == 0

    def test_just_past_cutoff_counts_one_day(self):
        now = datetime(2025, 1, 10, 0, 0, 0, 1000, tzinfo=timezone.utc)
        result = compute_overdue("2025-01-07T00:00:00Z", 3, now=now)
        assert result.is_overdue is True
        assert result.days_past_due == 1

    def test_partial_day_rounds_up(self):
        now = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)
        result = compute_overdue("2025-01-01T00:00:00Z", 3, now=now)
        assert result.days_past_due == 7

    def test_default_grace_is_three_days(self):
        result = compute_overdue("2025-01-01T00:00:00Z", now=NOW)
        assert result.cutoff == datetime(2025, 1, 4, tzinfo=timezone.utc)

    def test_zero_grace(self):
        result = compute_overdue("2025-01-09T00:00:00Z", 0, now=NOW)
        assert result.is_overdue is True
        assert result.days_past_due == 1

    def test_more_grace_never_increases_days_past_due(self):
        previous_cutoff = None
        previous_days = None
        for grace in range(0, 15):
            result = compute_overdue("2025-01-01T00:00:00Z", grace, now=NOW)
            if previous_cutoff is not None:
                assert result.cutoff >= previous_cutoff
                assert result.days_past_due <= previous_days
            previous_cutoff = result.cutoff
            previous_days = result.days_past_due

    def test_unparsable_due(self):
        with pytest.raises(InvalidInputError):
            compute_overdue("not-a-date", now=NOW)

    def test_negative_grace_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_overdue("2025-01-01T00:00:00Z", -1, now=NOW)

    @pytest.mark.parametrize("due,grace", [
        ("9999-12-31T00:00:00Z", 3),
        ("2025-01-01T00:00:00Z", 10**9),
    ])
    def test_cutoff_out_of_range(self, due, grace):
        with pytest.raises(InvalidInputError, match="out of range"):
            compute_overdue(due, grace, now=NOW)

    def test_offset_at_end_of_calendar_is_out_of_range(self):
        with pytest.raises(InvalidInputError, match="out of range"):
            compute_overdue("9999-12-31T23:00:00-05:00", 0, now=NOW)


# ═══════════════════════════════════════════════════════════════════
# Messages
# ═══════════════════════════════════════════════════════════════════

class TestMessages:
    def test_format_amount(self):
        assert format_amount(150000) == "$1500.00"
        assert format_amount(5) == "$0.05"

    def test_templates_include_amount(self):
        messages = overdue_messages(150000)
        assert set(messages) == {"reminder", "planOffer", "statusCheck", "lateFeeInfo"}
        assert "$1500.00" in messages["reminder"]
