from datetime import datetime
from typing import Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.domain.entities.loyalty import (
    EXPIRABLE_TYPES,
    LoyaltyAccount,
    LoyaltyEarnReason,
    LoyaltyTransaction,
    LoyaltyTransactionType,
)
from app.domain.errors import DuplicateAwardError
from app.domain.value_objects.date_range import as_utc
from app.infrastructure.db.tables import loyalty_accounts, loyalty_transactions

_EXPIRABLE = [t.value for t in EXPIRABLE_TYPES]


def earn_key_for(transaction: LoyaltyTransaction) -> str | None:
    if (
        transaction.transaction_type == LoyaltyTransactionType.EARNED
        and transaction.booking_id is not None
    ):
        return f"{transaction.user_id}:{transaction.booking_id}"
    return None


class LoyaltyRepoSQL(LoyaltyRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _due_filter(self, moment: datetime):
        return (
            loyalty_transactions.c.transaction_type.in_(_EXPIRABLE),
            loyalty_transactions.c.is_expired.is_(False),
            loyalty_transactions.c.expiry_date.is_not(None),
            loyalty_transactions.c.expiry_date <= as_utc(moment),
        )

    def _to_entity(self, row) -> LoyaltyTransaction:
        return LoyaltyTransaction(
            id=row["id"],
            user_id=row["user_id"],
            points=row["points"],
            transaction_type=LoyaltyTransactionType(row["transaction_type"]),
            transaction_date=as_utc(row["transaction_date"]),
            earn_reason=LoyaltyEarnReason(row["earn_reason"]) if row["earn_reason"] else None,
            description=row["description"],
            booking_id=row["booking_id"],
            expiry_date=as_utc(row["expiry_date"]) if row["expiry_date"] else None,
            is_expired=bool(row["is_expired"]),
        )

    async def add(self, transaction: LoyaltyTransaction) -> LoyaltyTransaction:
        earn_key = earn_key_for(transaction)
        stmt = insert(loyalty_transactions).values(
            user_id=transaction.user_id,
            points=transaction.points,
            transaction_type=transaction.transaction_type.value,
            earn_reason=transaction.earn_reason.value if transaction.earn_reason else None,
            description=transaction.description,
            booking_id=transaction.booking_id,
            transaction_date=as_utc(transaction.transaction_date),
            expiry_date=as_utc(transaction.expiry_date) if transaction.expiry_date else None,
            is_expired=transaction.is_expired,
            earn_key=earn_key,
        )
        try:
            # savepoint keeps the caller's transaction usable after a duplicate
            async with self._session.begin_nested():
                result = await self._session.execute(stmt)
        except IntegrityError as exc:
            if earn_key is not None:
                raise DuplicateAwardError(transaction.user_id, transaction.booking_id) from exc
            raise
        transaction.id = result.inserted_primary_key[0]
        return transaction

    async def has_earned_for_booking(self, user_id: str, booking_id: int) -> bool:
        stmt = (
            select(loyalty_transactions.c.id)
            .where(
                loyalty_transactions.c.user_id == user_id,
                loyalty_transactions.c.booking_id == booking_id,
                loyalty_transactions.c.transaction_type == LoyaltyTransactionType.EARNED.value,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar() is not None

    async def list_for_user(
        self,
        user_id: str,
        offset: int = 0,
        limit: int | None = None,
    ) -> Sequence[LoyaltyTransaction]:
        stmt = (
            select(loyalty_transactions)
            .where(loyalty_transactions.c.user_id == user_id)
            .order_by(
                loyalty_transactions.c.transaction_date.desc(),
                loyalty_transactions.c.id.desc(),
            )
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.mappings()]

    async def count_for_user(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(loyalty_transactions).where(
            loyalty_transactions.c.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return int(result.scalar() or 0)

    async def list_users_with_due_expiry(self, moment: datetime) -> Sequence[str]:
        stmt = (
            select(loyalty_transactions.c.user_id)
            .where(*self._due_filter(moment))
            .distinct()
            .order_by(loyalty_transactions.c.user_id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def mark_expired(self, user_id: str, moment: datetime) -> int:
        stmt = (
            update(loyalty_transactions)
            .where(loyalty_transactions.c.user_id == user_id, *self._due_filter(moment))
            .values(is_expired=True)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def save_account(self, account: LoyaltyAccount) -> None:
        values = dict(
            available_points=account.available_points,
            total_points=account.total_points,
            lifetime_earned=account.lifetime_earned,
            lifetime_redeemed=account.lifetime_redeemed,
            updated_at=as_utc(account.updated_at) if account.updated_at else None,
        )
        result = await self._session.execute(
            update(loyalty_accounts)
            .where(loyalty_accounts.c.user_id == account.user_id)
            .values(**values)
        )
        if result.rowcount == 0:
            await self._session.execute(
                insert(loyalty_accounts).values(user_id=account.user_id, **values)
            )
