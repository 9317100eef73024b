"""
Rate optimizer.

Turns a rental length and three tier prices (daily, weekly, monthly) into the
cheapest billing tiling the greedy rule can find:

1. As many 30-day months as fit.
2. Whole weeks out of the remainder, but only when paying for those weeks is
   not more expensive than paying the whole remainder at the daily price.
3. What is left at the daily price.

The algorithm does not backtrack. Results are pinned by regression tests.
"""

import math
from decimal import Decimal

from app.domain.constants import DAYS_PER_MONTH, DAYS_PER_WEEK
from app.domain.errors import ValidationError
from app.domain.labels import Language, no_periods, unit_label
from app.domain.value_objects.rate_breakdown import RateBreakdown, RateComparison


def _validate(total_days: int, **rates: Decimal) -> None:
    if total_days <= 0:
        raise ValidationError("total_days", "Total days must be greater than 0")
    for name, rate in rates.items():
        if Decimal(rate) < 0:
            raise ValidationError(name, "Rates cannot be negative")


def _describe(months: int, weeks: int, days: int, language: Language) -> str:
    parts = []
    if months > 0:
        parts.append(unit_label("month", months, language))
    if weeks > 0:
        parts.append(unit_label("week", weeks, language))
    if days > 0:
        parts.append(unit_label("day", days, language))
    return " + ".join(parts) if parts else no_periods(language)


def compute_optimal_cost(
    total_days: int,
    daily_rate: Decimal,
    weekly_rate: Decimal,
    monthly_rate: Decimal,
    language: Language = Language.EN,
) -> RateBreakdown:
    """
    Greedy month/week/day tiling of total_days.

    Raises:
        ValidationError: total_days <= 0 or a negative rate.
    """
    _validate(total_days, daily_rate=daily_rate, weekly_rate=weekly_rate, monthly_rate=monthly_rate)
    daily_rate, weekly_rate, monthly_rate = Decimal(daily_rate), Decimal(weekly_rate), Decimal(monthly_rate)

    remaining = total_days

    months = remaining // DAYS_PER_MONTH
    remaining -= months * DAYS_PER_MONTH

    weeks = 0
    if remaining >= DAYS_PER_WEEK:
        candidate = remaining // DAYS_PER_WEEK
        # weekly tiling is compared against the whole remainder at the daily price
        if candidate * weekly_rate <= remaining * daily_rate:
            weeks = candidate
            remaining -= weeks * DAYS_PER_WEEK

    days = remaining

    return RateBreakdown(
        total_days=total_days,
        monthly_periods=months,
        monthly_cost=months * monthly_rate,
        weekly_periods=weeks,
        weekly_cost=weeks * weekly_rate,
        daily_periods=days,
        daily_cost=days * daily_rate,
        description=_describe(months, weeks, days, language),
    )


def compute_standard_cost(
    total_days: int,
    daily_rate: Decimal,
    weekly_rate: Decimal,
    monthly_rate: Decimal,
) -> Decimal:
    """Naive single-tier price: ceiling months, else ceiling weeks, else days."""
    _validate(total_days, daily_rate=daily_rate, weekly_rate=weekly_rate, monthly_rate=monthly_rate)
    if total_days >= DAYS_PER_MONTH:
        return math.ceil(total_days / DAYS_PER_MONTH) * Decimal(monthly_rate)
    if total_days >= DAYS_PER_WEEK:
        return math.ceil(total_days / DAYS_PER_WEEK) * Decimal(weekly_rate)
    return total_days * Decimal(daily_rate)


def compare_standard_vs_optimized(
    total_days: int,
    daily_rate: Decimal,
    weekly_rate: Decimal,
    monthly_rate: Decimal,
    language: Language = Language.EN,
) -> RateComparison:
    standard = compute_standard_cost(total_days, daily_rate, weekly_rate, monthly_rate)
    breakdown = compute_optimal_cost(total_days, daily_rate, weekly_rate, monthly_rate, language)
    return RateComparison(standard=standard, optimized=breakdown.total_cost, breakdown=breakdown)


def compute_extra_cost(
    total_days: int,
    quantity: int,
    daily_price: Decimal,
    weekly_price: Decimal,
    monthly_price: Decimal,
    language: Language = Language.EN,
) -> RateBreakdown:
    """Tiles one unit of an extra, then scales every tier by quantity."""
    if quantity <= 0:
        raise ValidationError("quantity", "Quantity must be greater than 0")
    unit = compute_optimal_cost(total_days, daily_price, weekly_price, monthly_price, language)
    return unit.scaled(quantity)
