"""In-memory adapters for development and tests."""

from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo, InMemoryVehicleRepo
from app.infrastructure.in_memory.lock_manager import InMemoryLockManager
from app.infrastructure.in_memory.loyalty_repo import InMemoryLoyaltyRepo
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager

__all__ = [
    # Repositories
    "InMemoryBookingRepo",
    "InMemoryVehicleRepo",
    "InMemoryCatalogRepo",
    "InMemoryLoyaltyRepo",
    # Infrastructure
    "InMemoryLockManager",
    "NoopTransactionManager",
]
