"""
Application layer of the rental core.

Use cases, DTOs, shared services and the ports (interfaces) implemented by
the infrastructure layer.

Layout:
- use_cases/: booking lifecycle and loyalty ledger operations
- services/: rate optimizer, availability checker and helpers shared by use cases
- dtos/: Data Transfer Objects
- interfaces/: ports (contracts for adapters)
"""

from app.application.dtos import (
    AwardResultDTO,
    BookingDTO,
    CostEstimateDTO,
    CreateBookingDTO,
    ExtraRequestDTO,
    LoyaltySummaryDTO,
    LoyaltyTransactionDTO,
    LoyaltyTransactionPageDTO,
    RedeemResultDTO,
    SweepReport,
)
from app.application.interfaces import (
    BookingNumberGenerator,
    BookingRepo,
    CatalogRepo,
    Clock,
    FakeClock,
    LockManager,
    LoyaltyRepo,
    SystemClock,
    TransactionManager,
    VehicleRepo,
)

__all__ = [
    # DTOs
    "CreateBookingDTO",
    "ExtraRequestDTO",
    "BookingDTO",
    "CostEstimateDTO",
    "AwardResultDTO",
    "RedeemResultDTO",
    "LoyaltySummaryDTO",
    "LoyaltyTransactionDTO",
    "LoyaltyTransactionPageDTO",
    "SweepReport",
    # Interfaces - Repositories
    "BookingRepo",
    "VehicleRepo",
    "CatalogRepo",
    "LoyaltyRepo",
    # Interfaces - Infrastructure
    "TransactionManager",
    "LockManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "BookingNumberGenerator",
]
