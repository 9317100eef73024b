import copy
from datetime import datetime
from typing import Sequence

from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.domain.entities.loyalty import (
    LoyaltyAccount,
    LoyaltyTransaction,
    LoyaltyTransactionType,
)
from app.domain.errors import DuplicateAwardError


class InMemoryLoyaltyRepo(LoyaltyRepo):
    def __init__(self) -> None:
        self.transactions: dict[int, LoyaltyTransaction] = {}
        self.accounts: dict[str, LoyaltyAccount] = {}
        # mirrors the unique earn key of the SQL table
        self._earn_keys: set[tuple[str, int]] = set()
        self._next_id = 1

    async def add(self, transaction: LoyaltyTransaction) -> LoyaltyTransaction:
        earn_key = None
        if (
            transaction.transaction_type == LoyaltyTransactionType.EARNED
            and transaction.booking_id is not None
        ):
            earn_key = (transaction.user_id, transaction.booking_id)
            if earn_key in self._earn_keys:
                raise DuplicateAwardError(transaction.user_id, transaction.booking_id)

        transaction.id = self._next_id
        self._next_id += 1
        self.transactions[transaction.id] = copy.deepcopy(transaction)
        if earn_key:
            self._earn_keys.add(earn_key)
        return transaction

    async def has_earned_for_booking(self, user_id: str, booking_id: int) -> bool:
        return (user_id, booking_id) in self._earn_keys

    async def list_for_user(
        self,
        user_id: str,
        offset: int = 0,
        limit: int | None = None,
    ) -> Sequence[LoyaltyTransaction]:
        found = sorted(
            (t for t in self.transactions.values() if t.user_id == user_id),
            key=lambda t: (t.transaction_date, t.id),
            reverse=True,
        )
        end = None if limit is None else offset + limit
        return [copy.deepcopy(t) for t in found[offset:end]]

    async def count_for_user(self, user_id: str) -> int:
        return sum(1 for t in self.transactions.values() if t.user_id == user_id)

    async def list_users_with_due_expiry(self, moment: datetime) -> Sequence[str]:
        users = {t.user_id for t in self.transactions.values() if t.is_due_for_expiry(moment)}
        return sorted(users)

    async def mark_expired(self, user_id: str, moment: datetime) -> int:
        flipped = 0
        for txn in self.transactions.values():
            if txn.user_id == user_id and txn.is_due_for_expiry(moment):
                txn.is_expired = True
                flipped += 1
        return flipped

    async def save_account(self, account: LoyaltyAccount) -> None:
        self.accounts[account.user_id] = copy.copy(account)

    def clear(self) -> None:
        """Drops all data (testing)."""
        self.transactions.clear()
        self.accounts.clear()
        self._earn_keys.clear()
        self._next_id = 1
