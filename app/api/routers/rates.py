from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_language
from app.api.schemas.bookings import RateBreakdownResponse
from app.api.schemas.rates import (
    ExtraRateCalculationRequest,
    RateCalculationRequest,
    RateCalculationResponse,
    RateComparisonResponse,
)
from app.application.services.rate_optimizer import (
    compare_standard_vs_optimized,
    compute_extra_cost,
    compute_optimal_cost,
)
from app.domain.labels import Language
from app.domain.value_objects.rate_breakdown import RateBreakdown

router = APIRouter()

Lang = Annotated[Language, Depends(get_language)]


def _to_response(breakdown: RateBreakdown) -> RateCalculationResponse:
    return RateCalculationResponse(
        total_days=breakdown.total_days,
        total_cost=breakdown.total_cost,
        breakdown=RateBreakdownResponse.model_validate(breakdown),
    )


@router.post("/rates/optimal", response_model=RateCalculationResponse)
async def calculate_optimal_rate(
    payload: RateCalculationRequest, language: Lang
) -> RateCalculationResponse:
    breakdown = compute_optimal_cost(
        payload.total_days,
        payload.daily_rate,
        payload.weekly_rate,
        payload.monthly_rate,
        language,
    )
    return _to_response(breakdown)


@router.post("/rates/extra", response_model=RateCalculationResponse)
async def calculate_extra_rate(
    payload: ExtraRateCalculationRequest, language: Lang
) -> RateCalculationResponse:
    breakdown = compute_extra_cost(
        payload.total_days,
        payload.quantity,
        payload.daily_price,
        payload.weekly_price,
        payload.monthly_price,
        language,
    )
    return _to_response(breakdown)


@router.post("/rates/compare", response_model=RateComparisonResponse)
async def compare_rates(payload: RateCalculationRequest, language: Lang) -> RateComparisonResponse:
    comparison = compare_standard_vs_optimized(
        payload.total_days,
        payload.daily_rate,
        payload.weekly_rate,
        payload.monthly_rate,
        language,
    )
    return RateComparisonResponse.model_validate(comparison)
