"""Booking entity - aggregate root of the rental lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.domain.errors import CancellationWindowClosedError, InvalidBookingStatusError
from app.domain.value_objects.date_range import DateRange


class BookingStatus(str, Enum):
    """Lifecycle states. Forward only; CANCELED and CLOSED are terminal."""

    OPEN = "OPEN"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    CLOSED = "CLOSED"


# Single-step staff transitions along the main line.
STAFF_TRANSITIONS: dict[BookingStatus, BookingStatus] = {
    BookingStatus.OPEN: BookingStatus.CONFIRMED,
    BookingStatus.CONFIRMED: BookingStatus.IN_PROGRESS,
    BookingStatus.IN_PROGRESS: BookingStatus.COMPLETED,
    BookingStatus.COMPLETED: BookingStatus.CLOSED,
}

CANCELABLE_STATUSES = frozenset({BookingStatus.OPEN, BookingStatus.CONFIRMED})

TERMINAL_STATUSES = frozenset({BookingStatus.CANCELED, BookingStatus.CLOSED})

# Not yet closed out; picked up by the cleanup sweep once overdue.
SWEEPABLE_STATUSES = frozenset(
    {
        BookingStatus.OPEN,
        BookingStatus.CONFIRMED,
        BookingStatus.IN_PROGRESS,
        BookingStatus.COMPLETED,
    }
)

# Bookings that keep a vehicle from being flagged available again.
VEHICLE_HOLDING_STATUSES = frozenset(
    {BookingStatus.OPEN, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS}
)


@dataclass
class BookingLine:
    """An extra attached to a booking, priced once at creation time."""

    extra_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    id: int | None = None
    booking_id: int | None = None
    created_at: datetime | None = None


@dataclass
class Booking:
    """
    A reservation of one vehicle over a [start, end) span.

    final_amount always equals rental_cost + extras_cost - discount.
    """

    user_id: str
    vehicle_id: int
    pickup_location_id: int
    return_location_id: int
    start: datetime
    end: datetime

    id: int | None = None
    booking_number: str = ""

    # Financials
    total_days: int = 0
    rental_cost: Decimal = Decimal("0")
    extras_cost: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")

    status: BookingStatus = BookingStatus.OPEN
    notes: str | None = None
    cancellation_reason: str | None = None

    # Concurrency control
    lock_version: int = 0

    created_at: datetime | None = None
    updated_at: datetime | None = None

    lines: list[BookingLine] = field(default_factory=list)

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start, end=self.end)

    @property
    def final_amount(self) -> Decimal:
        return self.rental_cost + self.extras_cost - self.discount

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def holds_vehicle(self) -> bool:
        return self.status in VEHICLE_HOLDING_STATUSES

    def is_overdue(self, now: datetime) -> bool:
        return self.end < now and self.status in SWEEPABLE_STATUSES

    # === Transitions ===

    def advance_to(self, target: BookingStatus, now: datetime) -> None:
        """Staff transition, one step along the main line."""
        expected_next = STAFF_TRANSITIONS.get(self.status)
        if expected_next is None or expected_next != target:
            allowed_from = [
                source.value for source, nxt in STAFF_TRANSITIONS.items() if nxt == target
            ]
            raise InvalidBookingStatusError(
                current_status=self.status.value,
                expected_status=allowed_from or "none",
                operation=f"move booking to {target.value}",
            )
        self._set_status(target, now)

    def cancel(self, reason: str | None, now: datetime) -> None:
        if self.status not in CANCELABLE_STATUSES:
            raise InvalidBookingStatusError(
                current_status=self.status.value,
                expected_status=sorted(s.value for s in CANCELABLE_STATUSES),
                operation="cancel booking",
            )
        if now >= self.start:
            raise CancellationWindowClosedError(self.id or 0)
        self.cancellation_reason = reason
        self._set_status(BookingStatus.CANCELED, now)

    def close_overdue(self, now: datetime) -> bool:
        """
        Closes the booking if its end has passed.

        Returns False, leaving the booking untouched, when there is nothing to do.
        """
        if not self.is_overdue(now):
            return False
        self._set_status(BookingStatus.CLOSED, now)
        return True

    def _set_status(self, status: BookingStatus, now: datetime) -> None:
        self.status = status
        self.updated_at = now
        self.lock_version += 1
