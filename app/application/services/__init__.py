"""Services shared by the use cases."""

from app.application.services.availability_checker import AvailabilityChecker, AvailabilityResult
from app.application.services.booking_pricing import BookingPricing, PricedBooking
from app.application.services.loyalty_accounts import refresh_account, replay_balance
from app.application.services.rate_optimizer import (
    compare_standard_vs_optimized,
    compute_extra_cost,
    compute_optimal_cost,
    compute_standard_cost,
)
from app.application.services.vehicle_flags import VehicleFlags

__all__ = [
    "AvailabilityChecker",
    "AvailabilityResult",
    "BookingPricing",
    "PricedBooking",
    "VehicleFlags",
    "refresh_account",
    "replay_balance",
    "compute_optimal_cost",
    "compute_standard_cost",
    "compare_standard_vs_optimized",
    "compute_extra_cost",
]
