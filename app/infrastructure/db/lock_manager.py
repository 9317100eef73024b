from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.lock_manager import USER_SCOPE, VEHICLE_SCOPE, LockManager
from app.infrastructure.db.tables import loyalty_accounts, vehicles


class SQLAlchemyLockManager(LockManager):
    """
    Row locks via SELECT ... FOR UPDATE.

    The lock lives until the surrounding transaction ends, not until hold()
    exits. SQLite has no row locks; it serializes writers on its own.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def hold(self, scope: str, key: int | str) -> AsyncIterator[None]:
        if scope == VEHICLE_SCOPE:
            await self._lock_vehicle(int(key))
        elif scope == USER_SCOPE:
            await self._lock_user(str(key))
        else:
            raise ValueError(f"Unknown lock scope: {scope}")
        yield

    async def _lock_vehicle(self, vehicle_id: int) -> None:
        stmt = select(vehicles.c.id).where(vehicles.c.id == vehicle_id).with_for_update()
        await self._session.execute(stmt)

    async def _lock_user(self, user_id: str) -> None:
        stmt = (
            select(loyalty_accounts.c.user_id)
            .where(loyalty_accounts.c.user_id == user_id)
            .with_for_update()
        )
        result = await self._session.execute(stmt)
        if result.first() is not None:
            return

        # first ledger write for this user: create the row that carries the lock
        try:
            async with self._session.begin_nested():
                await self._session.execute(insert(loyalty_accounts).values(user_id=user_id))
        except IntegrityError:
            pass  # created concurrently; the locking select below waits for it
        await self._session.execute(stmt)
