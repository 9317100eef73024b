import logging

from app.application.dtos.booking_dto import BookingDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import VEHICLE_SCOPE, LockManager
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.vehicle_flags import VehicleFlags
from app.application.use_cases.award_points import ProcessBookingPointsUseCase
from app.domain.entities.booking import BookingStatus
from app.domain.errors import BookingNotFoundError, OptimisticLockError
from app.domain.labels import Language

RELEASING_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CLOSED})


class AdvanceBookingUseCase:
    """
    Staff transition along Open -> Confirmed -> InProgress -> Completed -> Closed.

    Side effects, all in the booking's transaction:
    - InProgress flags the vehicle rented.
    - Completed / Closed release the vehicle when nothing else holds it.
    - Completed awards the booking's loyalty points (idempotent).
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        vehicle_flags: VehicleFlags,
        process_points: ProcessBookingPointsUseCase,
        lock_manager: LockManager,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._vehicle_flags = vehicle_flags
        self._process_points = process_points
        self._lock_manager = lock_manager
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    @error_boundary("advance_booking")
    async def execute(
        self,
        booking_id: int,
        target_status: BookingStatus,
        language: Language = Language.EN,
    ) -> BookingDTO:
        now = self._clock.now()
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            previous_status = booking.status

            async with self._lock_manager.hold(VEHICLE_SCOPE, booking.vehicle_id):
                expected_lock_version = booking.lock_version
                booking.advance_to(target_status, now)
                if not await self._booking_repo.update_status(booking, expected_lock_version):
                    raise OptimisticLockError(booking_id, expected_lock_version)

                if target_status == BookingStatus.IN_PROGRESS:
                    await self._vehicle_flags.mark_rented(booking.vehicle_id)
                elif target_status in RELEASING_STATUSES:
                    await self._vehicle_flags.release_if_idle(booking.vehicle_id, booking_id)

                if target_status == BookingStatus.COMPLETED:
                    await self._process_points.execute(
                        user_id=booking.user_id,
                        booking_id=booking_id,
                        amount=booking.final_amount,
                        language=language,
                    )

        self._logger.info(
            "Booking status changed",
            extra={
                "booking_id": booking_id,
                "from_status": previous_status.value,
                "to_status": target_status.value,
            },
        )
        return BookingDTO.from_entity(booking, language)
