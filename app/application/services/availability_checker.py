import logging
from dataclasses import dataclass
from datetime import datetime

from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.vehicle_repo import VehicleRepo

logger = logging.getLogger(__name__)

REASON_VEHICLE_NOT_FOUND = "VEHICLE_NOT_FOUND"
REASON_VEHICLE_NOT_AVAILABLE = "VEHICLE_NOT_AVAILABLE"
REASON_ALREADY_BOOKED = "ALREADY_BOOKED"


@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    reason: str | None = None


class AvailabilityChecker:
    """
    Decides whether a vehicle is free for [start, end].

    Overlap is boundary-inclusive: a booking ending at D blocks one starting at
    D. Canceled bookings never block. Callers that go on to insert a booking
    must hold the per-vehicle lock around check and insert.
    """

    def __init__(self, vehicle_repo: VehicleRepo, booking_repo: BookingRepo) -> None:
        self._vehicle_repo = vehicle_repo
        self._booking_repo = booking_repo

    async def check(
        self,
        vehicle_id: int,
        start: datetime,
        end: datetime,
        exclude_booking_id: int | None = None,
    ) -> AvailabilityResult:
        vehicle = await self._vehicle_repo.get(vehicle_id)
        if vehicle is None:
            return AvailabilityResult(False, REASON_VEHICLE_NOT_FOUND)
        if not vehicle.is_flagged_available:
            return AvailabilityResult(False, REASON_VEHICLE_NOT_AVAILABLE)

        conflicts = await self._booking_repo.find_overlapping(
            vehicle_id, start, end, exclude_booking_id=exclude_booking_id
        )
        if conflicts:
            logger.debug(
                "Vehicle already booked",
                extra={"vehicle_id": vehicle_id, "conflicts": [b.id for b in conflicts]},
            )
            return AvailabilityResult(False, REASON_ALREADY_BOOKED)
        return AvailabilityResult(True)

    async def is_available(
        self,
        vehicle_id: int,
        start: datetime,
        end: datetime,
        exclude_booking_id: int | None = None,
    ) -> bool:
        result = await self.check(vehicle_id, start, end, exclude_booking_id)
        return result.available
