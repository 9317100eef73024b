from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.api.schemas.bookings import Money, RateBreakdownResponse


class RateCalculationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_days: int
    daily_rate: Money
    weekly_rate: Money
    monthly_rate: Money


class ExtraRateCalculationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_days: int
    quantity: int = Field(default=1)
    daily_price: Money
    weekly_price: Money
    monthly_price: Money


class RateCalculationResponse(BaseModel):
    total_days: int
    total_cost: Decimal
    breakdown: RateBreakdownResponse


class RateComparisonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    standard: Decimal
    optimized: Decimal
    savings: Decimal
    is_optimized: bool
    breakdown: RateBreakdownResponse
