"""Booking DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.domain.entities.booking import Booking, BookingLine
from app.domain.labels import Language, describe
from app.domain.value_objects.rate_breakdown import RateBreakdown


@dataclass
class ExtraRequestDTO:
    """An extra asked for at creation / estimation time."""

    extra_id: int
    quantity: int = 1


@dataclass
class CreateBookingDTO:
    """Input of the create-booking use case."""

    user_id: str
    vehicle_id: int
    pickup_location_id: int
    return_location_id: int
    start: datetime
    end: datetime
    extras: list[ExtraRequestDTO] = field(default_factory=list)
    notes: str | None = None


@dataclass
class BookingLineDTO:
    id: int | None
    extra_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    @classmethod
    def from_entity(cls, line: BookingLine) -> "BookingLineDTO":
        return cls(
            id=line.id,
            extra_id=line.extra_id,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line.total_price,
        )


@dataclass
class BookingDTO:
    """Booking as returned to callers, with a localized status label."""

    id: int | None
    booking_number: str
    user_id: str
    vehicle_id: int
    pickup_location_id: int
    return_location_id: int
    start: datetime
    end: datetime
    total_days: int
    rental_cost: Decimal
    extras_cost: Decimal
    discount: Decimal
    final_amount: Decimal
    status: str
    status_text: str
    notes: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    lines: list[BookingLineDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, booking: Booking, language: Language = Language.EN) -> "BookingDTO":
        return cls(
            id=booking.id,
            booking_number=booking.booking_number,
            user_id=booking.user_id,
            vehicle_id=booking.vehicle_id,
            pickup_location_id=booking.pickup_location_id,
            return_location_id=booking.return_location_id,
            start=booking.start,
            end=booking.end,
            total_days=booking.total_days,
            rental_cost=booking.rental_cost,
            extras_cost=booking.extras_cost,
            discount=booking.discount,
            final_amount=booking.final_amount,
            status=booking.status.value,
            status_text=describe(booking.status, language),
            notes=booking.notes,
            cancellation_reason=booking.cancellation_reason,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            lines=[BookingLineDTO.from_entity(line) for line in booking.lines],
        )


@dataclass
class PricedExtraDTO:
    extra_id: int
    name: str
    quantity: int
    unit_price: Decimal
    breakdown: RateBreakdown

    @property
    def total_price(self) -> Decimal:
        return self.breakdown.total_cost


@dataclass
class CostEstimateDTO:
    """Quote for a prospective booking; nothing is persisted."""

    vehicle_id: int
    total_days: int
    rental: RateBreakdown
    standard_rental_cost: Decimal
    extras: list[PricedExtraDTO]
    is_available: bool
    unavailable_reason: str | None
    points_to_earn: int

    @property
    def rental_savings(self) -> Decimal:
        return self.standard_rental_cost - self.rental.total_cost

    @property
    def extras_cost(self) -> Decimal:
        return sum((extra.total_price for extra in self.extras), Decimal("0"))

    @property
    def total_cost(self) -> Decimal:
        return self.rental.total_cost + self.extras_cost
