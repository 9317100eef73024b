from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

VEHICLE_SCOPE = "vehicle"
USER_SCOPE = "user"


class LockManager(Protocol):
    """
    Per-key critical sections.

    Must be entered inside an open transaction; SQL implementations take a row
    lock that is released on commit/rollback.
    """

    @asynccontextmanager
    async def hold(self, scope: str, key: int | str) -> AsyncIterator[None]:
        yield
