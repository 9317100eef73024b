"""Value Objects of the rental domain."""

from app.domain.value_objects.booking_number import BookingNumber
from app.domain.value_objects.date_range import DateRange, as_utc
from app.domain.value_objects.loyalty_policy import LoyaltyPolicy, add_months
from app.domain.value_objects.rate_breakdown import RateBreakdown, RateComparison

__all__ = [
    "BookingNumber",
    "DateRange",
    "LoyaltyPolicy",
    "RateBreakdown",
    "RateComparison",
    "add_months",
    "as_utc",
]
