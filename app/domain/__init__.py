"""
Domain layer of the rental core.

Pure business rules, no framework dependencies.

Layout:
- entities/: Booking, catalog records, loyalty ledger
- value_objects/: immutable values (DateRange, BookingNumber, RateBreakdown...)
- errors.py: typed domain errors
- labels.py: static enum display labels per language
- constants.py: domain constants
"""

from app.domain.constants import DAYS_PER_MONTH, DAYS_PER_WEEK
from app.domain.entities import (
    Booking,
    BookingLine,
    BookingStatus,
    ExtraPrice,
    Location,
    LoyaltyAccount,
    LoyaltyBalance,
    LoyaltyEarnReason,
    LoyaltyTransaction,
    LoyaltyTransactionType,
    Vehicle,
    VehicleStatus,
)
from app.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from app.domain.labels import Language, describe
from app.domain.value_objects import (
    BookingNumber,
    DateRange,
    LoyaltyPolicy,
    RateBreakdown,
    RateComparison,
)

__all__ = [
    # Constants
    "DAYS_PER_WEEK",
    "DAYS_PER_MONTH",
    # Entities
    "Booking",
    "BookingLine",
    "BookingStatus",
    "Vehicle",
    "VehicleStatus",
    "Location",
    "ExtraPrice",
    "LoyaltyTransaction",
    "LoyaltyTransactionType",
    "LoyaltyEarnReason",
    "LoyaltyBalance",
    "LoyaltyAccount",
    # Value Objects
    "BookingNumber",
    "DateRange",
    "LoyaltyPolicy",
    "RateBreakdown",
    "RateComparison",
    # Labels
    "Language",
    "describe",
    # Errors
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ForbiddenError",
    "InvalidStateError",
    "InternalError",
]
