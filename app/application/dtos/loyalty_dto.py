"""Loyalty ledger DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.domain.entities.loyalty import LoyaltyTransaction
from app.domain.labels import Language, describe


@dataclass
class LoyaltyTransactionDTO:
    id: int | None
    user_id: str
    points: int
    transaction_type: str
    type_text: str
    transaction_date: datetime
    earn_reason: str | None = None
    earn_reason_text: str | None = None
    description: str | None = None
    booking_id: int | None = None
    expiry_date: datetime | None = None
    is_expired: bool = False

    @classmethod
    def from_entity(
        cls, txn: LoyaltyTransaction, language: Language = Language.EN
    ) -> "LoyaltyTransactionDTO":
        return cls(
            id=txn.id,
            user_id=txn.user_id,
            points=txn.points,
            transaction_type=txn.transaction_type.value,
            type_text=describe(txn.transaction_type, language),
            transaction_date=txn.transaction_date,
            earn_reason=txn.earn_reason.value if txn.earn_reason else None,
            earn_reason_text=describe(txn.earn_reason, language) if txn.earn_reason else None,
            description=txn.description,
            booking_id=txn.booking_id,
            expiry_date=txn.expiry_date,
            is_expired=txn.is_expired,
        )


@dataclass
class AwardResultDTO:
    """
    Outcome of an award.

    already_awarded is True when the (user, booking) pair had been credited
    before; nothing was written in that case.
    """

    user_id: str
    awarded: bool
    already_awarded: bool = False
    transaction: LoyaltyTransactionDTO | None = None
    available_points: int | None = None


@dataclass
class RedeemResultDTO:
    user_id: str
    points_redeemed: int
    discount_amount: Decimal
    available_points: int
    transaction: LoyaltyTransactionDTO


@dataclass
class LoyaltySummaryDTO:
    user_id: str
    available_points: int
    total_points: int
    lifetime_earned: int
    lifetime_redeemed: int
    points_value: Decimal
    points_expiring_soon: int
    last_earned_at: datetime | None = None
    recent_transactions: list[LoyaltyTransactionDTO] = field(default_factory=list)


@dataclass
class LoyaltyTransactionPageDTO:
    items: list[LoyaltyTransactionDTO]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.page_size - 1) // self.page_size
