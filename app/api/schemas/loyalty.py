from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.loyalty import LoyaltyEarnReason


class AwardPointsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(min_length=1, max_length=64)
    points: int
    reason: LoyaltyEarnReason = LoyaltyEarnReason.PROMOTION
    booking_id: int | None = None
    description: str | None = Field(default=None, max_length=500)
    expiry_date: datetime | None = None


class RedeemPointsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    points: int
    booking_id: int | None = None
    description: str | None = Field(default=None, max_length=500)


class LoyaltyTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None
    points: int
    transaction_type: str
    type_text: str
    earn_reason: str | None = None
    earn_reason_text: str | None = None
    description: str | None = None
    booking_id: int | None = None
    transaction_date: datetime
    expiry_date: datetime | None = None
    is_expired: bool


class AwardPointsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    awarded: bool
    already_awarded: bool
    transaction: LoyaltyTransactionResponse | None = None
    available_points: int | None = None


class RedeemPointsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    points_redeemed: int
    discount_amount: Decimal
    available_points: int
    transaction: LoyaltyTransactionResponse


class LoyaltySummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    available_points: int
    total_points: int
    lifetime_earned: int
    lifetime_redeemed: int
    points_value: Decimal
    points_expiring_soon: int
    last_earned_at: datetime | None = None
    recent_transactions: list[LoyaltyTransactionResponse] = Field(default_factory=list)


class LoyaltyTransactionPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[LoyaltyTransactionResponse]
    page: int
    page_size: int
    total_count: int
    total_pages: int
