"""Value Object LoyaltyPolicy - fixed conversion constants of the points program."""

import calendar
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from app.domain.constants import (
    DEFAULT_EXPIRING_SOON_DAYS,
    DEFAULT_MIN_REDEMPTION_POINTS,
    DEFAULT_POINT_VALUE,
    DEFAULT_POINTS_EXPIRY_MONTHS,
    DEFAULT_POINTS_PER_CURRENCY_UNIT,
)


def add_months(moment: datetime, months: int) -> datetime:
    """Calendar month arithmetic; the day is clamped to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class LoyaltyPolicy:
    """
    Business rules of the points program.

    Attributes:
        points_per_currency_unit: Points earned per unit of money spent.
        point_value: Money value of a single point when redeemed.
        min_redemption_points: Smallest redemption accepted.
        expiry_months: Lifetime of earned points.
        expiring_soon_days: Horizon used for the "expiring soon" summary figure.
    """

    points_per_currency_unit: Decimal = Decimal(DEFAULT_POINTS_PER_CURRENCY_UNIT)
    point_value: Decimal = Decimal(DEFAULT_POINT_VALUE)
    min_redemption_points: int = DEFAULT_MIN_REDEMPTION_POINTS
    expiry_months: int = DEFAULT_POINTS_EXPIRY_MONTHS
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS

    def points_for_amount(self, amount: Decimal) -> int:
        return math.floor(Decimal(amount) * self.points_per_currency_unit)

    def discount_for_points(self, points: int) -> Decimal:
        return points * self.point_value

    def expiry_from(self, moment: datetime) -> datetime:
        return add_months(moment, self.expiry_months)

    def expiring_soon_cutoff(self, moment: datetime) -> datetime:
        return moment + timedelta(days=self.expiring_soon_days)
