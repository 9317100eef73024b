"""Interfaces (ports) of the application layer."""

from app.application.interfaces.booking_number_generator import (
    BookingNumberGenerator,
    FakeBookingNumberGenerator,
    RealBookingNumberGenerator,
)
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.catalog_repo import CatalogRepo
from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.lock_manager import USER_SCOPE, VEHICLE_SCOPE, LockManager
from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_repo import VehicleRepo

__all__ = [
    # Repositories
    "BookingRepo",
    "VehicleRepo",
    "CatalogRepo",
    "LoyaltyRepo",
    # Infrastructure
    "TransactionManager",
    "LockManager",
    "VEHICLE_SCOPE",
    "USER_SCOPE",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "BookingNumberGenerator",
    "RealBookingNumberGenerator",
    "FakeBookingNumberGenerator",
]
