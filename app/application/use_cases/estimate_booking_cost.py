from datetime import datetime
from typing import Sequence

from app.application.dtos.booking_dto import CostEstimateDTO, ExtraRequestDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.application.services.availability_checker import AvailabilityChecker
from app.application.services.booking_pricing import BookingPricing
from app.application.services.rate_optimizer import compute_standard_cost
from app.domain.errors import VehicleNotFoundError
from app.domain.labels import Language
from app.domain.value_objects.date_range import DateRange, as_utc
from app.domain.value_objects.loyalty_policy import LoyaltyPolicy


class EstimateBookingCostUseCase:
    """Quote through the same pricing path as booking creation; nothing is written."""

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        pricing: BookingPricing,
        availability_checker: AvailabilityChecker,
        transaction_manager: TransactionManager,
        policy: LoyaltyPolicy,
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._pricing = pricing
        self._availability_checker = availability_checker
        self._transaction_manager = transaction_manager
        self._policy = policy

    @error_boundary("estimate_booking_cost")
    async def execute(
        self,
        vehicle_id: int,
        pickup_location_id: int,
        return_location_id: int,
        start: datetime,
        end: datetime,
        extras: Sequence[ExtraRequestDTO] = (),
        language: Language = Language.EN,
    ) -> CostEstimateDTO:
        date_range = DateRange(start=as_utc(start), end=as_utc(end))
        total_days = date_range.rental_days

        async with self._transaction_manager.start():
            vehicle = await self._vehicle_repo.get(vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(vehicle_id)
            await self._pricing.check_locations(pickup_location_id, return_location_id)
            priced = await self._pricing.price(vehicle, total_days, extras, language)
            availability = await self._availability_checker.check(
                vehicle_id, date_range.start, date_range.end
            )

        estimate = CostEstimateDTO(
            vehicle_id=vehicle_id,
            total_days=total_days,
            rental=priced.rental,
            standard_rental_cost=compute_standard_cost(
                total_days, vehicle.daily_rate, vehicle.weekly_rate, vehicle.monthly_rate
            ),
            extras=priced.extras,
            is_available=availability.available,
            unavailable_reason=availability.reason,
            points_to_earn=0,
        )
        estimate.points_to_earn = self._policy.points_for_amount(estimate.total_cost)
        return estimate
