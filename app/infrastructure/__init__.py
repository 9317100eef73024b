"""
Infrastructure layer - rental core.

Concrete implementations of the application ports.

Structure:
- db/: SQL repositories, row locks, transactions and deadlock retry
- in_memory/: in-process adapters for development and tests
"""

# Database
from app.infrastructure.db.lock_manager import SQLAlchemyLockManager
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL, VehicleRepoSQL
from app.infrastructure.db.repositories.loyalty_repo_sql import LoyaltyRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

# In-Memory
from app.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryCatalogRepo,
    InMemoryLockManager,
    InMemoryLoyaltyRepo,
    InMemoryVehicleRepo,
    NoopTransactionManager,
)

__all__ = [
    # Database - Repositories SQL
    "BookingRepoSQL",
    "VehicleRepoSQL",
    "CatalogRepoSQL",
    "LoyaltyRepoSQL",
    "SQLAlchemyLockManager",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryBookingRepo",
    "InMemoryVehicleRepo",
    "InMemoryCatalogRepo",
    "InMemoryLoyaltyRepo",
    "InMemoryLockManager",
    "NoopTransactionManager",
]
