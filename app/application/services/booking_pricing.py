"""Prices a prospective booking: rental tiling plus every requested extra."""

from collections.abc import Sequence
from dataclasses import dataclass

from app.application.dtos.booking_dto import ExtraRequestDTO, PricedExtraDTO
from app.application.interfaces.catalog_repo import CatalogRepo
from app.application.services.rate_optimizer import compute_extra_cost, compute_optimal_cost
from app.domain.constants import PICKUP, RETURN
from app.domain.entities.catalog import Vehicle
from app.domain.errors import (
    ExtraNotFoundError,
    ExtraUnavailableError,
    LocationNotFoundError,
    LocationUnavailableError,
    ValidationError,
)
from app.domain.labels import Language
from app.domain.value_objects.rate_breakdown import RateBreakdown


@dataclass
class PricedBooking:
    rental: RateBreakdown
    extras: list[PricedExtraDTO]


def validate_extra_requests(extras: Sequence[ExtraRequestDTO]) -> None:
    for extra in extras:
        if extra.quantity <= 0:
            raise ValidationError(
                f"extras[{extra.extra_id}].quantity", "Quantity must be greater than 0"
            )


class BookingPricing:
    def __init__(self, catalog_repo: CatalogRepo) -> None:
        self._catalog_repo = catalog_repo

    async def check_locations(self, pickup_location_id: int, return_location_id: int) -> None:
        for role, location_id in ((PICKUP, pickup_location_id), (RETURN, return_location_id)):
            location = await self._catalog_repo.get_location(location_id)
            if location is None:
                raise LocationNotFoundError(location_id, role)
            if not location.is_active:
                raise LocationUnavailableError(location_id, role)

    async def price(
        self,
        vehicle: Vehicle,
        total_days: int,
        extras: Sequence[ExtraRequestDTO],
        language: Language = Language.EN,
    ) -> PricedBooking:
        validate_extra_requests(extras)
        rental = compute_optimal_cost(
            total_days,
            vehicle.daily_rate,
            vehicle.weekly_rate,
            vehicle.monthly_rate,
            language,
        )

        priced_extras = []
        for request in extras:
            extra = await self._catalog_repo.get_extra(request.extra_id)
            if extra is None:
                raise ExtraNotFoundError(request.extra_id)
            if not extra.is_active:
                raise ExtraUnavailableError(request.extra_id)
            breakdown = compute_extra_cost(
                total_days,
                request.quantity,
                extra.daily_price,
                extra.weekly_price,
                extra.monthly_price,
                language,
            )
            priced_extras.append(
                PricedExtraDTO(
                    extra_id=extra.id,
                    name=extra.name,
                    quantity=request.quantity,
                    unit_price=extra.daily_price,
                    breakdown=breakdown,
                )
            )
        return PricedBooking(rental=rental, extras=priced_extras)
