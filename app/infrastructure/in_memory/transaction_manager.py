from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.application.interfaces.transaction_manager import TransactionManager


class NoopTransactionManager(TransactionManager):
    """In-memory mode has nothing to commit or roll back."""

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
