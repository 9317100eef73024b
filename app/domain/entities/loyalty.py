"""Loyalty ledger entities.

The balance is never stored as ground truth: `LoyaltyBalance.replay` derives it
from the transaction list, and `LoyaltyAccount` is only a cached projection of
that replay.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class LoyaltyTransactionType(str, Enum):
    EARNED = "EARNED"
    REDEEMED = "REDEEMED"
    EXPIRED = "EXPIRED"
    BONUS = "BONUS"
    REFUND = "REFUND"
    ADJUSTMENT = "ADJUSTMENT"


class LoyaltyEarnReason(str, Enum):
    BOOKING_COMPLETED = "BOOKING_COMPLETED"
    REFERRAL = "REFERRAL"
    REGISTRATION = "REGISTRATION"
    REVIEW = "REVIEW"
    BIRTHDAY = "BIRTHDAY"
    PROMOTION = "PROMOTION"
    LONG_TERM_RENTAL = "LONG_TERM_RENTAL"
    PREMIUM_CAR = "PREMIUM_CAR"


CREDIT_TYPES = frozenset(
    {LoyaltyTransactionType.EARNED, LoyaltyTransactionType.BONUS, LoyaltyTransactionType.REFUND}
)
DEBIT_TYPES = frozenset(
    {
        LoyaltyTransactionType.REDEEMED,
        LoyaltyTransactionType.EXPIRED,
        LoyaltyTransactionType.ADJUSTMENT,
    }
)
EXPIRABLE_TYPES = frozenset({LoyaltyTransactionType.EARNED, LoyaltyTransactionType.BONUS})
LIFETIME_EARNED_TYPES = EXPIRABLE_TYPES


@dataclass
class LoyaltyTransaction:
    """
    One ledger entry. points is signed: positive credits, negative debits.
    """

    user_id: str
    points: int
    transaction_type: LoyaltyTransactionType
    transaction_date: datetime
    id: int | None = None
    earn_reason: LoyaltyEarnReason | None = None
    description: str | None = None
    booking_id: int | None = None
    expiry_date: datetime | None = None
    is_expired: bool = False

    @property
    def is_credit(self) -> bool:
        return self.transaction_type in CREDIT_TYPES

    @property
    def is_debit(self) -> bool:
        return self.transaction_type in DEBIT_TYPES

    def is_due_for_expiry(self, moment: datetime) -> bool:
        return (
            self.transaction_type in EXPIRABLE_TYPES
            and not self.is_expired
            and self.expiry_date is not None
            and self.expiry_date <= moment
        )


@dataclass(frozen=True)
class LoyaltyBalance:
    """Totals derived by replaying a user's ledger."""

    available_points: int = 0
    total_points: int = 0
    lifetime_earned: int = 0
    lifetime_redeemed: int = 0
    last_earned_at: datetime | None = None

    @classmethod
    def replay(cls, transactions: Iterable[LoyaltyTransaction]) -> "LoyaltyBalance":
        live_credits = 0
        all_credits = 0
        debits = 0
        lifetime_earned = 0
        lifetime_redeemed = 0
        last_earned_at: datetime | None = None

        for txn in transactions:
            if txn.is_credit:
                all_credits += txn.points
                if not txn.is_expired:
                    live_credits += txn.points
            elif txn.is_debit:
                debits += abs(txn.points)

            if txn.transaction_type in LIFETIME_EARNED_TYPES:
                lifetime_earned += txn.points
                if last_earned_at is None or txn.transaction_date > last_earned_at:
                    last_earned_at = txn.transaction_date
            elif txn.transaction_type == LoyaltyTransactionType.REDEEMED:
                lifetime_redeemed += abs(txn.points)

        return cls(
            available_points=max(0, live_credits - debits),
            total_points=all_credits,
            lifetime_earned=lifetime_earned,
            lifetime_redeemed=lifetime_redeemed,
            last_earned_at=last_earned_at,
        )


@dataclass
class LoyaltyAccount:
    """Cached per-user totals, refreshed after every ledger write."""

    user_id: str
    available_points: int = 0
    total_points: int = 0
    lifetime_earned: int = 0
    lifetime_redeemed: int = 0
    updated_at: datetime | None = None

    @classmethod
    def from_balance(cls, user_id: str, balance: LoyaltyBalance, now: datetime) -> "LoyaltyAccount":
        return cls(
            user_id=user_id,
            available_points=balance.available_points,
            total_points=balance.total_points,
            lifetime_earned=balance.lifetime_earned,
            lifetime_redeemed=balance.lifetime_redeemed,
            updated_at=now,
        )
