import copy
from datetime import datetime
from typing import Sequence

from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import (
    SWEEPABLE_STATUSES,
    VEHICLE_HOLDING_STATUSES,
    Booking,
    BookingStatus,
)


class InMemoryBookingRepo(BookingRepo):
    """Stores copies so callers never mutate persisted state by accident."""

    def __init__(self) -> None:
        self.bookings: dict[int, Booking] = {}
        self._next_id = 1
        self._next_line_id = 1

    async def get_by_id(self, booking_id: int) -> Booking | None:
        booking = self.bookings.get(booking_id)
        return copy.deepcopy(booking) if booking else None

    async def list_by_user(
        self,
        user_id: str,
        status: BookingStatus | None = None,
    ) -> Sequence[Booking]:
        found = [
            b for b in self.bookings.values()
            if b.user_id == user_id and (status is None or b.status == status)
        ]
        found.sort(key=lambda b: (b.created_at, b.id), reverse=True)
        return [copy.deepcopy(b) for b in found]

    async def add(self, booking: Booking) -> Booking:
        if any(b.booking_number == booking.booking_number for b in self.bookings.values()):
            raise ValueError("Booking number already exists")
        booking.id = self._next_id
        self._next_id += 1
        for line in booking.lines:
            line.id = self._next_line_id
            line.booking_id = booking.id
            self._next_line_id += 1
        self.bookings[booking.id] = copy.deepcopy(booking)
        return booking

    async def update_status(self, booking: Booking, expected_lock_version: int) -> bool:
        stored = self.bookings.get(booking.id)
        if stored is None or stored.lock_version != expected_lock_version:
            return False
        stored.status = booking.status
        stored.cancellation_reason = booking.cancellation_reason
        stored.updated_at = booking.updated_at
        stored.lock_version = booking.lock_version
        return True

    async def find_overlapping(
        self,
        vehicle_id: int,
        start: datetime,
        end: datetime,
        exclude_booking_id: int | None = None,
    ) -> Sequence[Booking]:
        return [
            copy.deepcopy(b) for b in self.bookings.values()
            if b.vehicle_id == vehicle_id
            and b.status != BookingStatus.CANCELED
            and b.id != exclude_booking_id
            and b.start <= end
            and b.end >= start
        ]

    async def list_overdue(self, now: datetime) -> Sequence[Booking]:
        return [
            copy.deepcopy(b) for b in self.bookings.values()
            if b.end < now and b.status in SWEEPABLE_STATUSES
        ]

    async def has_other_holding_booking(self, vehicle_id: int, exclude_booking_id: int) -> bool:
        return any(
            b.vehicle_id == vehicle_id
            and b.id != exclude_booking_id
            and b.status in VEHICLE_HOLDING_STATUSES
            for b in self.bookings.values()
        )

    def clear(self) -> None:
        """Drops all data (testing)."""
        self.bookings.clear()
        self._next_id = 1
        self._next_line_id = 1
