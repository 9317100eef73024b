import logging

from app.application.dtos.sweep_report import SweepReport
from app.application.error_boundary import error_boundary
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import VEHICLE_SCOPE, LockManager
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.vehicle_flags import VehicleFlags

logger = logging.getLogger(__name__)


class CleanupSweepUseCase:
    """
    Closes bookings whose end date has passed.

    Each booking is closed in its own transaction with a compare-and-set on
    lock_version, so a rerun or a concurrent sweep never closes (or counts) a
    booking twice. No loyalty points are awarded here.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        vehicle_flags: VehicleFlags,
        lock_manager: LockManager,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._vehicle_flags = vehicle_flags
        self._lock_manager = lock_manager
        self._transaction_manager = transaction_manager
        self._clock = clock

    @error_boundary("cleanup_sweep")
    async def execute(self) -> SweepReport:
        now = self._clock.now()
        report = SweepReport()

        async with self._transaction_manager.start():
            overdue = await self._booking_repo.list_overdue(now)

        logger.info("Booking cleanup sweep started", extra={"candidates": len(overdue)})

        for booking in overdue:
            try:
                async with self._transaction_manager.start():
                    async with self._lock_manager.hold(VEHICLE_SCOPE, booking.vehicle_id):
                        expected_lock_version = booking.lock_version
                        if not booking.close_overdue(now):
                            continue
                        closed = await self._booking_repo.update_status(
                            booking, expected_lock_version
                        )
                        if not closed:
                            logger.info(
                                "Booking changed concurrently, skipped",
                                extra={"booking_id": booking.id},
                            )
                            continue
                        await self._vehicle_flags.release_if_idle(booking.vehicle_id, booking.id)
                report.succeeded += 1
            except Exception as exc:
                logger.error(
                    "Failed to close overdue booking",
                    exc_info=exc,
                    extra={"booking_id": booking.id, "vehicle_id": booking.vehicle_id},
                )
                report.record_failure(booking.id, exc)

        logger.info(
            "Booking cleanup sweep finished",
            extra={"closed": report.succeeded, "failed": report.failed},
        )
        return report
