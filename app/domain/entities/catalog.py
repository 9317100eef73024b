"""Catalog entities supplied read-only by the fleet catalog."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class VehicleStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


@dataclass
class Vehicle:
    """
    A rentable vehicle and its tiered prices.

    status is a cached flag; the lifecycle keeps it in step with booking
    activity inside the same transaction as the booking write.
    """

    id: int
    name: str
    daily_rate: Decimal
    weekly_rate: Decimal
    monthly_rate: Decimal
    status: VehicleStatus = VehicleStatus.AVAILABLE

    @property
    def is_flagged_available(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE


@dataclass
class Location:
    """Pickup / return branch."""

    id: int
    name: str
    is_active: bool = True


@dataclass
class ExtraPrice:
    """Price row of an optional extra (GPS, child seat, ...)."""

    id: int
    name: str
    daily_price: Decimal
    weekly_price: Decimal
    monthly_price: Decimal
    is_active: bool = True
