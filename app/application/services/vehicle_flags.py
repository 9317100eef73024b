import logging

from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.domain.entities.catalog import VehicleStatus

logger = logging.getLogger(__name__)


class VehicleFlags:
    """
    Keeps the cached vehicle status flag in step with booking activity.

    Callers run these inside the transaction of the booking write, holding
    the vehicle lock.
    """

    def __init__(self, vehicle_repo: VehicleRepo, booking_repo: BookingRepo) -> None:
        self._vehicle_repo = vehicle_repo
        self._booking_repo = booking_repo

    async def mark_rented(self, vehicle_id: int) -> None:
        await self._vehicle_repo.set_status(vehicle_id, VehicleStatus.RENTED)
        logger.info("Vehicle flagged rented", extra={"vehicle_id": vehicle_id})

    async def release_if_idle(self, vehicle_id: int, booking_id: int) -> bool:
        """
        Flips a RENTED vehicle back to AVAILABLE unless another booking still
        holds it. Maintenance / out-of-service flags are left alone.
        """
        vehicle = await self._vehicle_repo.get(vehicle_id)
        if vehicle is None or vehicle.status != VehicleStatus.RENTED:
            return False
        if await self._booking_repo.has_other_holding_booking(vehicle_id, booking_id):
            return False
        await self._vehicle_repo.set_status(vehicle_id, VehicleStatus.AVAILABLE)
        logger.info(
            "Vehicle released",
            extra={"vehicle_id": vehicle_id, "booking_id": booking_id},
        )
        return True
