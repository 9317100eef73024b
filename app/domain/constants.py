"""Domain constants."""

# Billing tiers, in days
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

BOOKING_NUMBER_PREFIX = "NOL"

# Loyalty program defaults (overridable through settings)
DEFAULT_POINTS_PER_CURRENCY_UNIT = "1"
DEFAULT_POINT_VALUE = "0.01"
DEFAULT_MIN_REDEMPTION_POINTS = 100
DEFAULT_POINTS_EXPIRY_MONTHS = 24
DEFAULT_EXPIRING_SOON_DAYS = 30
DEFAULT_RECENT_TRANSACTIONS_LIMIT = 5

# Location roles, used in error codes
PICKUP = "pickup"
RETURN = "return"
