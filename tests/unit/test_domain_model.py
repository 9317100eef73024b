import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.catalog import VehicleStatus
from app.domain.entities.loyalty import (
    LoyaltyBalance,
    LoyaltyEarnReason,
    LoyaltyTransaction,
    LoyaltyTransactionType,
)
from app.domain.errors import (
    CancellationWindowClosedError,
    InvalidBookingStatusError,
    InvalidDateRangeError,
    InvalidStateError,
    ValidationError,
)
from app.domain.labels import Language, describe, unit_label
from app.domain.value_objects.booking_number import BookingNumber
from app.domain.value_objects.date_range import DateRange, as_utc
from app.domain.value_objects.loyalty_policy import LoyaltyPolicy, add_months

NOW = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)


def make_booking(status: BookingStatus = BookingStatus.OPEN, days_ahead: int = 2) -> Booking:
    start = NOW + timedelta(days=days_ahead)
    return Booking(
        id=1,
        user_id="user-1",
        vehicle_id=1,
        pickup_location_id=1,
        return_location_id=1,
        start=start,
        end=start + timedelta(days=3),
        rental_cost=Decimal("300"),
        extras_cost=Decimal("30"),
        discount=Decimal("10"),
        status=status,
    )


def txn(points: int, kind: LoyaltyTransactionType, expired: bool = False, **kwargs) -> LoyaltyTransaction:
    return LoyaltyTransaction(
        user_id="user-1",
        points=points,
        transaction_type=kind,
        transaction_date=kwargs.pop("transaction_date", NOW),
        is_expired=expired,
        **kwargs,
    )


# ============================================================================
# DateRange
# ============================================================================


class TestDateRange:
    def test_any_started_day_is_billed(self):
        assert DateRange(NOW, NOW + timedelta(hours=25)).rental_days == 2
        assert DateRange(NOW, NOW + timedelta(days=2)).rental_days == 2
        assert DateRange(NOW, NOW + timedelta(hours=1)).rental_days == 1

    def test_end_must_follow_start(self):
        with pytest.raises(InvalidDateRangeError) as exc_info:
            DateRange(NOW, NOW)
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.code == "INVALID_DATE_RANGE"

    def test_touching_ranges_overlap(self):
        first = DateRange(NOW, NOW + timedelta(days=3))
        second = DateRange(NOW + timedelta(days=3), NOW + timedelta(days=5))
        third = DateRange(NOW + timedelta(days=4), NOW + timedelta(days=5))

        assert first.overlaps_inclusive(second)
        assert not first.overlaps_inclusive(third)

    def test_as_utc(self):
        naive = datetime(2025, 3, 1, 10, 0)
        plus_two = datetime(2025, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

        assert as_utc(naive) == NOW
        assert as_utc(plus_two) == NOW
        assert as_utc(plus_two).tzinfo == timezone.utc


# ============================================================================
# Booking
# ============================================================================


class TestBooking:
    def test_final_amount(self):
        assert make_booking().final_amount == Decimal("320")

    def test_advance_one_step(self):
        booking = make_booking()

        booking.advance_to(BookingStatus.CONFIRMED, NOW)

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.lock_version == 1
        assert booking.updated_at == NOW

    def test_skipping_a_step_is_rejected(self):
        booking = make_booking()

        with pytest.raises(InvalidBookingStatusError) as exc_info:
            booking.advance_to(BookingStatus.IN_PROGRESS, NOW)

        assert isinstance(exc_info.value, InvalidStateError)
        assert booking.status == BookingStatus.OPEN
        assert booking.lock_version == 0

    @pytest.mark.parametrize("status", [BookingStatus.CANCELED, BookingStatus.CLOSED])
    def test_terminal_states_do_not_move(self, status):
        booking = make_booking(status)

        assert booking.is_terminal
        with pytest.raises(InvalidBookingStatusError):
            booking.advance_to(BookingStatus.CLOSED, NOW)

    def test_cancel_before_start(self):
        booking = make_booking(BookingStatus.CONFIRMED)

        booking.cancel("plans changed", NOW)

        assert booking.status == BookingStatus.CANCELED
        assert booking.cancellation_reason == "plans changed"

    def test_cancel_after_start_is_rejected(self):
        booking = make_booking(days_ahead=0)

        with pytest.raises(CancellationWindowClosedError):
            booking.cancel(None, NOW)

    def test_cancel_in_progress_is_rejected(self):
        with pytest.raises(InvalidBookingStatusError):
            make_booking(BookingStatus.IN_PROGRESS).cancel(None, NOW)

    def test_close_overdue(self):
        booking = make_booking(BookingStatus.IN_PROGRESS)

        assert booking.close_overdue(NOW) is False
        assert booking.close_overdue(NOW + timedelta(days=10)) is True
        assert booking.status == BookingStatus.CLOSED
        assert booking.close_overdue(NOW + timedelta(days=10)) is False


# ============================================================================
# Loyalty
# ============================================================================


class TestLoyaltyBalance:
    def test_replay(self):
        balance = LoyaltyBalance.replay(
            [
                txn(500, LoyaltyTransactionType.EARNED),
                txn(100, LoyaltyTransactionType.BONUS, expired=True),
                txn(-200, LoyaltyTransactionType.REDEEMED),
            ]
        )

        assert balance.available_points == 300
        assert balance.total_points == 600
        assert balance.lifetime_earned == 600
        assert balance.lifetime_redeemed == 200
        assert balance.last_earned_at == NOW

    def test_available_never_negative(self):
        balance = LoyaltyBalance.replay(
            [
                txn(100, LoyaltyTransactionType.EARNED, expired=True),
                txn(-100, LoyaltyTransactionType.REDEEMED),
            ]
        )

        assert balance.available_points == 0

    def test_empty_ledger(self):
        balance = LoyaltyBalance.replay([])

        assert balance.available_points == 0
        assert balance.last_earned_at is None

    def test_due_for_expiry(self):
        due = txn(50, LoyaltyTransactionType.EARNED, expiry_date=NOW)
        refund = txn(50, LoyaltyTransactionType.REFUND, expiry_date=NOW)

        assert due.is_due_for_expiry(NOW)
        assert not due.is_due_for_expiry(NOW - timedelta(seconds=1))
        assert not refund.is_due_for_expiry(NOW)


class TestLoyaltyPolicy:
    def test_points_are_floored(self):
        assert LoyaltyPolicy().points_for_amount(Decimal("123.99")) == 123

    def test_discount_for_points(self):
        assert LoyaltyPolicy().discount_for_points(250) == Decimal("2.50")

    def test_add_months_clamps_day(self):
        assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
        assert add_months(datetime(2025, 11, 15), 3) == datetime(2026, 2, 15)

    def test_default_expiry_is_two_years(self):
        assert LoyaltyPolicy().expiry_from(NOW) == datetime(2027, 3, 1, 10, 0, tzinfo=timezone.utc)


# ============================================================================
# Labels and references
# ============================================================================


class TestLabels:
    def test_describe(self):
        assert describe(BookingStatus.IN_PROGRESS) == "In Progress"
        assert describe(BookingStatus.IN_PROGRESS, Language.AR) == "قيد التنفيذ"
        assert describe(VehicleStatus.OUT_OF_SERVICE, Language.AR) == "خارج الخدمة"
        assert describe(LoyaltyEarnReason.BIRTHDAY) == "Birthday bonus points"

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("ar", Language.AR),
            ("ar-EG,en;q=0.8", Language.AR),
            ("en-US", Language.EN),
            ("fr-FR", Language.EN),
            ("", Language.EN),
        ],
    )
    def test_parse_accept_language(self, header, expected):
        assert Language.parse(header) == expected

    def test_parse_uses_given_default(self):
        assert Language.parse(None, Language.AR) == Language.AR

    def test_unit_label_plural(self):
        assert unit_label("day", 1) == "1 day"
        assert unit_label("week", 2) == "2 weeks"
        assert unit_label("month", 1, Language.AR) == "1 شهر"


class TestBookingNumber:
    def test_generate_format(self):
        number = BookingNumber.generate(NOW)

        assert re.fullmatch(r"NOL-20250301-[A-Z0-9]{6}", number.value)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            BookingNumber("")
