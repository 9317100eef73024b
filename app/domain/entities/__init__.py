"""Entities of the rental domain."""

from app.domain.entities.booking import (
    CANCELABLE_STATUSES,
    STAFF_TRANSITIONS,
    SWEEPABLE_STATUSES,
    TERMINAL_STATUSES,
    VEHICLE_HOLDING_STATUSES,
    Booking,
    BookingLine,
    BookingStatus,
)
from app.domain.entities.catalog import ExtraPrice, Location, Vehicle, VehicleStatus
from app.domain.entities.loyalty import (
    LoyaltyAccount,
    LoyaltyBalance,
    LoyaltyEarnReason,
    LoyaltyTransaction,
    LoyaltyTransactionType,
)

__all__ = [
    # Booking
    "Booking",
    "BookingLine",
    "BookingStatus",
    "STAFF_TRANSITIONS",
    "CANCELABLE_STATUSES",
    "TERMINAL_STATUSES",
    "SWEEPABLE_STATUSES",
    "VEHICLE_HOLDING_STATUSES",
    # Catalog
    "Vehicle",
    "VehicleStatus",
    "Location",
    "ExtraPrice",
    # Loyalty
    "LoyaltyTransaction",
    "LoyaltyTransactionType",
    "LoyaltyEarnReason",
    "LoyaltyBalance",
    "LoyaltyAccount",
]
