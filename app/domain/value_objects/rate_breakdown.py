"""Value Objects describing how a rental span was billed."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RateBreakdown:
    """
    Tiling of a rental span into month/week/day billing units.

    At most one tier is partially used; the cost fields always add up to
    total_cost.
    """

    total_days: int
    monthly_periods: int = 0
    monthly_cost: Decimal = Decimal("0")
    weekly_periods: int = 0
    weekly_cost: Decimal = Decimal("0")
    daily_periods: int = 0
    daily_cost: Decimal = Decimal("0")
    description: str = ""

    @property
    def total_cost(self) -> Decimal:
        return self.monthly_cost + self.weekly_cost + self.daily_cost

    def scaled(self, quantity: int) -> "RateBreakdown":
        """Returns the same tiling with every tier cost multiplied by quantity."""
        return RateBreakdown(
            total_days=self.total_days,
            monthly_periods=self.monthly_periods,
            monthly_cost=self.monthly_cost * quantity,
            weekly_periods=self.weekly_periods,
            weekly_cost=self.weekly_cost * quantity,
            daily_periods=self.daily_periods,
            daily_cost=self.daily_cost * quantity,
            description=self.description,
        )


@dataclass(frozen=True)
class RateComparison:
    """Naive ceiling-tier price next to the optimized tiling."""

    standard: Decimal
    optimized: Decimal
    breakdown: RateBreakdown

    @property
    def savings(self) -> Decimal:
        return self.standard - self.optimized

    @property
    def is_optimized(self) -> bool:
        return self.savings > 0
