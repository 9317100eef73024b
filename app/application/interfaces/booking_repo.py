from datetime import datetime
from typing import Sequence

from app.domain.entities.booking import Booking, BookingStatus


class BookingRepo:
    async def get_by_id(self, booking_id: int) -> Booking | None:
        raise NotImplementedError

    async def list_by_user(
        self,
        user_id: str,
        status: BookingStatus | None = None,
    ) -> Sequence[Booking]:
        """Newest first."""
        raise NotImplementedError

    async def add(self, booking: Booking) -> Booking:
        """Persists the booking and its lines; assigns ids."""
        raise NotImplementedError

    async def update_status(self, booking: Booking, expected_lock_version: int) -> bool:
        """
        Writes status, cancellation_reason, updated_at and lock_version.

        Compare-and-set: returns False, writing nothing, when the stored
        lock_version is no longer expected_lock_version.
        """
        raise NotImplementedError

    async def find_overlapping(
        self,
        vehicle_id: int,
        start: datetime,
        end: datetime,
        exclude_booking_id: int | None = None,
    ) -> Sequence[Booking]:
        """Non-canceled bookings with existing.start <= end and existing.end >= start."""
        raise NotImplementedError

    async def list_overdue(self, now: datetime) -> Sequence[Booking]:
        """Bookings with end < now that are neither canceled nor closed."""
        raise NotImplementedError

    async def has_other_holding_booking(self, vehicle_id: int, exclude_booking_id: int) -> bool:
        """True if another Open/Confirmed/InProgress booking holds the vehicle."""
        raise NotImplementedError
