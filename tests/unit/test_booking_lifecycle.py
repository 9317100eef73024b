"""
Booking lifecycle use cases on the in-memory adapters.

Catalog (see conftest): car 1 at 100/600/2000, GPS extra at 10/60/200.
A 10-day rental therefore costs 900 and one GPS 90.
"""

import asyncio
from decimal import Decimal

import pytest

from app.application.dtos.booking_dto import CreateBookingDTO, ExtraRequestDTO
from app.domain.entities.booking import BookingStatus
from app.domain.entities.catalog import VehicleStatus
from app.domain.entities.loyalty import LoyaltyTransactionType
from app.domain.errors import (
    BookingNotFoundError,
    CancellationWindowClosedError,
    ConflictError,
    ExtraNotFoundError,
    ExtraUnavailableError,
    ForbiddenError,
    InternalError,
    InvalidBookingStatusError,
    InvalidDateRangeError,
    LocationNotFoundError,
    LocationUnavailableError,
    NotBookingOwnerError,
    ValidationError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from app.domain.labels import Language
from tests.conftest import (
    AIRPORT_ID,
    CAR_ID,
    CLOSED_BRANCH_ID,
    DOWNTOWN_ID,
    GPS_ID,
    MAINTENANCE_CAR_ID,
    OTHER_CAR_ID,
    RETIRED_EXTRA_ID,
    days_from_now,
)

USER = "user-1"
OTHER_USER = "user-2"


def booking_request(
    start_day: int = 2,
    end_day: int = 12,
    vehicle_id: int = CAR_ID,
    user_id: str = USER,
    extras=None,
    pickup: int = AIRPORT_ID,
    dropoff: int = DOWNTOWN_ID,
) -> CreateBookingDTO:
    return CreateBookingDTO(
        user_id=user_id,
        vehicle_id=vehicle_id,
        pickup_location_id=pickup,
        return_location_id=dropoff,
        start=days_from_now(start_day),
        end=days_from_now(end_day),
        extras=extras if extras is not None else [],
    )


async def advance(use_cases, booking_id: int, *statuses: BookingStatus):
    result = None
    for status in statuses:
        result = await use_cases["advance_booking"].execute(booking_id, status)
    return result


# ============================================================================
# CREATE
# ============================================================================


class TestCreateBooking:
    @pytest.mark.asyncio
    async def test_prices_rental_and_extras(self, use_cases, repos):
        booking = await use_cases["create_booking"].execute(
            booking_request(extras=[ExtraRequestDTO(extra_id=GPS_ID, quantity=1)])
        )

        assert booking.id is not None
        assert booking.booking_number == "NOL-20250301-000001"
        assert booking.status == BookingStatus.OPEN.value
        assert booking.status_text == "Open"
        assert booking.total_days == 10
        assert booking.rental_cost == Decimal("900")
        assert booking.extras_cost == Decimal("90")
        assert booking.final_amount == Decimal("990")
        assert len(booking.lines) == 1
        assert booking.lines[0].unit_price == Decimal("10")
        assert booking.lines[0].total_price == Decimal("90")
        assert booking.id in repos["booking_repo"].bookings

    @pytest.mark.asyncio
    async def test_status_text_follows_language(self, use_cases):
        booking = await use_cases["create_booking"].execute(booking_request(), Language.AR)

        assert booking.status_text == "مفتوح"

    @pytest.mark.asyncio
    async def test_overlapping_request_rejected(self, use_cases):
        await use_cases["create_booking"].execute(booking_request(2, 12))

        with pytest.raises(VehicleUnavailableError) as exc_info:
            await use_cases["create_booking"].execute(booking_request(5, 15, user_id=OTHER_USER))

        assert isinstance(exc_info.value, ConflictError)

    @pytest.mark.asyncio
    async def test_touching_boundary_rejected(self, use_cases):
        await use_cases["create_booking"].execute(booking_request(2, 12))

        with pytest.raises(VehicleUnavailableError):
            await use_cases["create_booking"].execute(booking_request(12, 14))

    @pytest.mark.asyncio
    async def test_other_vehicle_same_dates(self, use_cases):
        await use_cases["create_booking"].execute(booking_request(2, 12))

        booking = await use_cases["create_booking"].execute(
            booking_request(2, 12, vehicle_id=OTHER_CAR_ID)
        )

        assert booking.vehicle_id == OTHER_CAR_ID

    @pytest.mark.asyncio
    async def test_flagged_vehicle_rejected(self, use_cases):
        with pytest.raises(VehicleUnavailableError):
            await use_cases["create_booking"].execute(
                booking_request(vehicle_id=MAINTENANCE_CAR_ID)
            )

    @pytest.mark.asyncio
    async def test_unknown_vehicle(self, use_cases):
        with pytest.raises(VehicleNotFoundError):
            await use_cases["create_booking"].execute(booking_request(vehicle_id=999))

    @pytest.mark.asyncio
    async def test_invalid_range(self, use_cases):
        with pytest.raises(InvalidDateRangeError):
            await use_cases["create_booking"].execute(booking_request(5, 5))

    @pytest.mark.asyncio
    async def test_inactive_pickup_location(self, use_cases):
        with pytest.raises(LocationUnavailableError) as exc_info:
            await use_cases["create_booking"].execute(booking_request(pickup=CLOSED_BRANCH_ID))

        assert exc_info.value.code == "PICKUP_LOCATION_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_unknown_return_location(self, use_cases):
        with pytest.raises(LocationNotFoundError) as exc_info:
            await use_cases["create_booking"].execute(booking_request(dropoff=99))

        assert exc_info.value.code == "RETURN_LOCATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_extra_errors(self, use_cases):
        create = use_cases["create_booking"]

        with pytest.raises(ValidationError):
            await create.execute(booking_request(extras=[ExtraRequestDTO(GPS_ID, 0)]))
        with pytest.raises(ExtraNotFoundError):
            await create.execute(booking_request(extras=[ExtraRequestDTO(42, 1)]))
        with pytest.raises(ExtraUnavailableError):
            await create.execute(booking_request(extras=[ExtraRequestDTO(RETIRED_EXTRA_ID, 1)]))

    @pytest.mark.asyncio
    async def test_concurrent_requests_only_one_wins(self, use_cases, repos):
        create = use_cases["create_booking"]

        results = await asyncio.gather(
            *(create.execute(booking_request(2, 12, user_id=f"user-{i}")) for i in range(5)),
            return_exceptions=True,
        )

        winners = [r for r in results if not isinstance(r, Exception)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert all(isinstance(err, VehicleUnavailableError) for err in losers)
        assert len(repos["booking_repo"].bookings) == 1


# ============================================================================
# CANCEL
# ============================================================================


class TestCancelBooking:
    @pytest.mark.asyncio
    async def test_owner_cancels_before_start(self, use_cases, repos):
        created = await use_cases["create_booking"].execute(booking_request())

        canceled = await use_cases["cancel_booking"].execute(created.id, USER, "plans changed")

        assert canceled.status == BookingStatus.CANCELED.value
        assert canceled.cancellation_reason == "plans changed"
        assert repos["booking_repo"].bookings[created.id].status == BookingStatus.CANCELED
        assert repos["vehicle_repo"].vehicles[CAR_ID].status == VehicleStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_canceled_range_can_be_rebooked(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())
        await use_cases["cancel_booking"].execute(created.id, USER)

        rebooked = await use_cases["create_booking"].execute(booking_request(user_id=OTHER_USER))

        assert rebooked.id != created.id

    @pytest.mark.asyncio
    async def test_confirmed_booking_can_be_canceled(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())
        await advance(use_cases, created.id, BookingStatus.CONFIRMED)

        canceled = await use_cases["cancel_booking"].execute(created.id, USER)

        assert canceled.status == BookingStatus.CANCELED.value

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())

        with pytest.raises(NotBookingOwnerError) as exc_info:
            await use_cases["cancel_booking"].execute(created.id, OTHER_USER)

        assert isinstance(exc_info.value, ForbiddenError)

    @pytest.mark.asyncio
    async def test_window_closes_at_start(self, use_cases, clock):
        created = await use_cases["create_booking"].execute(booking_request())
        clock.advance(days=2)

        with pytest.raises(CancellationWindowClosedError) as exc_info:
            await use_cases["cancel_booking"].execute(created.id, USER)

        assert exc_info.value.code == "CANCELLATION_WINDOW_CLOSED"

    @pytest.mark.asyncio
    async def test_completed_booking_cannot_be_canceled(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())
        await advance(
            use_cases,
            created.id,
            BookingStatus.CONFIRMED,
            BookingStatus.IN_PROGRESS,
            BookingStatus.COMPLETED,
        )

        with pytest.raises(InvalidBookingStatusError):
            await use_cases["cancel_booking"].execute(created.id, USER)

    @pytest.mark.asyncio
    async def test_unknown_booking(self, use_cases):
        with pytest.raises(BookingNotFoundError):
            await use_cases["cancel_booking"].execute(404, USER)


# ============================================================================
# READ
# ============================================================================


class TestReadBookings:
    @pytest.mark.asyncio
    async def test_owner_reads_booking(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())

        booking = await use_cases["get_booking"].execute(created.id, USER)

        assert booking.booking_number == created.booking_number
        assert booking.final_amount == Decimal("900")

    @pytest.mark.asyncio
    async def test_someone_elses_booking_reads_as_missing(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())

        with pytest.raises(BookingNotFoundError):
            await use_cases["get_booking"].execute(created.id, OTHER_USER)

    @pytest.mark.asyncio
    async def test_list_newest_first_with_status_filter(self, use_cases):
        first = await use_cases["create_booking"].execute(booking_request(2, 4))
        second = await use_cases["create_booking"].execute(booking_request(10, 12))
        await use_cases["create_booking"].execute(booking_request(2, 4, user_id=OTHER_USER, vehicle_id=OTHER_CAR_ID))
        await use_cases["cancel_booking"].execute(first.id, USER)

        everything = await use_cases["list_bookings"].execute(USER)
        canceled = await use_cases["list_bookings"].execute(USER, BookingStatus.CANCELED)

        assert [b.id for b in everything] == [second.id, first.id]
        assert [b.id for b in canceled] == [first.id]


# ============================================================================
# ADVANCE
# ============================================================================


class TestAdvanceBooking:
    @pytest.mark.asyncio
    async def test_full_line_flags_vehicle_and_awards_points(self, use_cases, repos):
        created = await use_cases["create_booking"].execute(
            booking_request(extras=[ExtraRequestDTO(GPS_ID, 1)])
        )
        vehicles = repos["vehicle_repo"].vehicles

        await advance(use_cases, created.id, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS)
        assert vehicles[CAR_ID].status == VehicleStatus.RENTED

        completed = await advance(use_cases, created.id, BookingStatus.COMPLETED)
        assert completed.status == BookingStatus.COMPLETED.value
        assert vehicles[CAR_ID].status == VehicleStatus.AVAILABLE

        earned = [
            t for t in repos["loyalty_repo"].transactions.values()
            if t.transaction_type == LoyaltyTransactionType.EARNED
        ]
        assert len(earned) == 1
        assert earned[0].points == 990
        assert earned[0].booking_id == created.id

        closed = await advance(use_cases, created.id, BookingStatus.CLOSED)
        assert closed.status == BookingStatus.CLOSED.value

    @pytest.mark.asyncio
    async def test_skipping_a_step(self, use_cases):
        created = await use_cases["create_booking"].execute(booking_request())

        with pytest.raises(InvalidBookingStatusError):
            await advance(use_cases, created.id, BookingStatus.IN_PROGRESS)

    @pytest.mark.asyncio
    async def test_points_are_not_awarded_twice(self, use_cases, repos):
        created = await use_cases["create_booking"].execute(booking_request())
        await advance(
            use_cases,
            created.id,
            BookingStatus.CONFIRMED,
            BookingStatus.IN_PROGRESS,
            BookingStatus.COMPLETED,
        )

        again = await use_cases["process_booking_points"].execute(USER, created.id, Decimal("900"))

        assert again.already_awarded is True
        assert len(repos["loyalty_repo"].transactions) == 1

    @pytest.mark.asyncio
    async def test_vehicle_stays_rented_while_another_booking_holds_it(self, use_cases, repos):
        first = await use_cases["create_booking"].execute(booking_request(2, 4))
        await use_cases["create_booking"].execute(booking_request(10, 12))

        await advance(
            use_cases,
            first.id,
            BookingStatus.CONFIRMED,
            BookingStatus.IN_PROGRESS,
            BookingStatus.COMPLETED,
        )

        assert repos["vehicle_repo"].vehicles[CAR_ID].status == VehicleStatus.RENTED

    @pytest.mark.asyncio
    async def test_unknown_booking(self, use_cases):
        with pytest.raises(BookingNotFoundError):
            await advance(use_cases, 404, BookingStatus.CONFIRMED)


# ============================================================================
# ESTIMATE
# ============================================================================


class TestEstimateCost:
    @pytest.mark.asyncio
    async def test_quote_matches_creation_pricing(self, use_cases, repos):
        estimate = await use_cases["estimate_cost"].execute(
            vehicle_id=CAR_ID,
            pickup_location_id=AIRPORT_ID,
            return_location_id=DOWNTOWN_ID,
            start=days_from_now(2),
            end=days_from_now(12),
            extras=[ExtraRequestDTO(GPS_ID, 1)],
        )

        assert estimate.total_days == 10
        assert estimate.rental.total_cost == Decimal("900")
        assert estimate.standard_rental_cost == Decimal("1200")
        assert estimate.rental_savings == Decimal("300")
        assert estimate.extras_cost == Decimal("90")
        assert estimate.total_cost == Decimal("990")
        assert estimate.points_to_earn == 990
        assert estimate.is_available is True
        assert repos["booking_repo"].bookings == {}

    @pytest.mark.asyncio
    async def test_quote_reports_unavailability(self, use_cases):
        await use_cases["create_booking"].execute(booking_request())

        estimate = await use_cases["estimate_cost"].execute(
            CAR_ID, AIRPORT_ID, DOWNTOWN_ID, days_from_now(5), days_from_now(8)
        )

        assert estimate.is_available is False
        assert estimate.unavailable_reason == "ALREADY_BOOKED"


# ============================================================================
# ERROR BOUNDARY
# ============================================================================


class TestErrorBoundary:
    @pytest.mark.asyncio
    async def test_infrastructure_fault_becomes_internal_error(self, use_cases, repos, monkeypatch):
        async def broken(booking_id):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(repos["booking_repo"], "get_by_id", broken)

        with pytest.raises(InternalError) as exc_info:
            await use_cases["get_booking"].execute(1, USER)

        assert exc_info.value.operation == "get_booking"
        assert "connection reset" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)
