import logging
from decimal import Decimal

from app.application.dtos.booking_dto import BookingDTO, CreateBookingDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.booking_number_generator import BookingNumberGenerator
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import VEHICLE_SCOPE, LockManager
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.application.services.availability_checker import AvailabilityChecker
from app.application.services.booking_pricing import BookingPricing, validate_extra_requests
from app.domain.entities.booking import Booking, BookingLine, BookingStatus
from app.domain.errors import VehicleNotFoundError, VehicleUnavailableError
from app.domain.labels import Language
from app.domain.value_objects.date_range import DateRange, as_utc


class CreateBookingUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        vehicle_repo: VehicleRepo,
        pricing: BookingPricing,
        availability_checker: AvailabilityChecker,
        lock_manager: LockManager,
        transaction_manager: TransactionManager,
        clock: Clock,
        number_generator: BookingNumberGenerator,
    ) -> None:
        self._booking_repo = booking_repo
        self._vehicle_repo = vehicle_repo
        self._pricing = pricing
        self._availability_checker = availability_checker
        self._lock_manager = lock_manager
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._number_generator = number_generator
        self._logger = logging.getLogger(__name__)

    @error_boundary("create_booking")
    async def execute(
        self, request: CreateBookingDTO, language: Language = Language.EN
    ) -> BookingDTO:
        date_range = DateRange(start=as_utc(request.start), end=as_utc(request.end))
        validate_extra_requests(request.extras)
        total_days = date_range.rental_days
        now = self._clock.now()

        # the vehicle lock comes first: every read below must follow it
        async with self._transaction_manager.start(), self._lock_manager.hold(
            VEHICLE_SCOPE, request.vehicle_id
        ):
            vehicle = await self._vehicle_repo.get(request.vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(request.vehicle_id)

            await self._pricing.check_locations(
                request.pickup_location_id, request.return_location_id
            )
            priced = await self._pricing.price(vehicle, total_days, request.extras, language)

            available = await self._availability_checker.is_available(
                request.vehicle_id, date_range.start, date_range.end
            )
            if not available:
                raise VehicleUnavailableError(request.vehicle_id)

            booking = Booking(
                user_id=request.user_id,
                vehicle_id=request.vehicle_id,
                pickup_location_id=request.pickup_location_id,
                return_location_id=request.return_location_id,
                start=date_range.start,
                end=date_range.end,
                booking_number=self._number_generator.generate(now),
                total_days=total_days,
                rental_cost=priced.rental.total_cost,
                extras_cost=sum(
                    (extra.total_price for extra in priced.extras), Decimal("0")
                ),
                status=BookingStatus.OPEN,
                notes=request.notes,
                created_at=now,
                updated_at=now,
                lines=[
                    BookingLine(
                        extra_id=extra.extra_id,
                        quantity=extra.quantity,
                        unit_price=extra.unit_price,
                        total_price=extra.total_price,
                        created_at=now,
                    )
                    for extra in priced.extras
                ],
            )
            booking = await self._booking_repo.add(booking)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "booking_number": booking.booking_number,
                "user_id": booking.user_id,
                "vehicle_id": booking.vehicle_id,
                "total_days": total_days,
                "final_amount": str(booking.final_amount),
            },
        )
        return BookingDTO.from_entity(booking, language)
