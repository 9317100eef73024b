from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, condecimal, field_validator

from app.domain.entities.booking import BookingStatus

Money = condecimal(max_digits=12, decimal_places=2)


class ExtraItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    extra_id: int
    quantity: int = 1


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle_id: int
    pickup_location_id: int
    return_location_id: int
    start_date: datetime
    end_date: datetime
    extras: list[ExtraItem] = Field(default_factory=list)
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("notes")
    @classmethod
    def _strip_notes(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class EstimateCostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle_id: int
    pickup_location_id: int
    return_location_id: int
    start_date: datetime
    end_date: datetime
    extras: list[ExtraItem] = Field(default_factory=list)


class CancelBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reason: str | None = Field(default=None, max_length=500)


class AdvanceBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: BookingStatus


class RateBreakdownResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days: int
    monthly_periods: int
    monthly_cost: Decimal
    weekly_periods: int
    weekly_cost: Decimal
    daily_periods: int
    daily_cost: Decimal
    total_cost: Decimal
    description: str


class BookingLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None
    extra_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
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
    status: BookingStatus
    status_text: str
    notes: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    lines: list[BookingLineResponse] = Field(default_factory=list)


class PricedExtraResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    extra_id: int
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    breakdown: RateBreakdownResponse


class CostEstimateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vehicle_id: int
    total_days: int
    rental: RateBreakdownResponse
    standard_rental_cost: Decimal
    rental_savings: Decimal
    extras: list[PricedExtraResponse]
    extras_cost: Decimal
    total_cost: Decimal
    is_available: bool
    unavailable_reason: str | None = None
    points_to_earn: int


class SweepFailureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    record_id: str
    error: str


class SweepReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    succeeded: int
    failed: int
    failures: list[SweepFailureResponse] = Field(default_factory=list)
