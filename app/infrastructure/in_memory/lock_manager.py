import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.application.interfaces.lock_manager import LockManager


class InMemoryLockManager(LockManager):
    """One asyncio.Lock per (scope, key), created on first use. Not re-entrant."""

    def __init__(self) -> None:
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}

    def _lock_for(self, scope: str, key: int | str) -> asyncio.Lock:
        lock_key = (scope, str(key))
        lock = self._locks.get(lock_key)
        if lock is None:
            lock = self._locks[lock_key] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, scope: str, key: int | str) -> AsyncIterator[None]:
        async with self._lock_for(scope, key):
            yield
