import logging

from app.application.dtos.booking_dto import BookingDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import VEHICLE_SCOPE, LockManager
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.vehicle_flags import VehicleFlags
from app.domain.errors import BookingNotFoundError, NotBookingOwnerError, OptimisticLockError
from app.domain.labels import Language


class CancelBookingUseCase:
    """
    Customer cancellation.

    Allowed from Open or Confirmed, strictly before the rental starts. The
    ledger is never touched.
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
        self._logger = logging.getLogger(__name__)

    @error_boundary("cancel_booking")
    async def execute(
        self,
        booking_id: int,
        requester_id: str,
        reason: str | None = None,
        language: Language = Language.EN,
    ) -> BookingDTO:
        now = self._clock.now()
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            if booking.user_id != requester_id:
                raise NotBookingOwnerError(booking_id, requester_id)

            async with self._lock_manager.hold(VEHICLE_SCOPE, booking.vehicle_id):
                expected_lock_version = booking.lock_version
                booking.cancel(reason, now)
                if not await self._booking_repo.update_status(booking, expected_lock_version):
                    raise OptimisticLockError(booking_id, expected_lock_version)
                await self._vehicle_flags.release_if_idle(booking.vehicle_id, booking_id)

        self._logger.info(
            "Booking canceled",
            extra={"booking_id": booking_id, "user_id": requester_id, "reason": reason},
        )
        return BookingDTO.from_entity(booking, language)
