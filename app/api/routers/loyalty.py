from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_use_cases
from app.api.deps import get_current_user_id, get_language
from app.api.schemas.loyalty import (
    AwardPointsRequest,
    AwardPointsResponse,
    LoyaltySummaryResponse,
    LoyaltyTransactionPageResponse,
    RedeemPointsRequest,
    RedeemPointsResponse,
)
from app.domain.labels import Language

router = APIRouter()

UserId = Annotated[str, Depends(get_current_user_id)]
Lang = Annotated[Language, Depends(get_language)]


@router.get("/loyalty/summary", response_model=LoyaltySummaryResponse)
async def get_loyalty_summary(
    user_id: UserId,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> LoyaltySummaryResponse:
    summary = await use_cases["loyalty_summary"].execute(user_id, language=language)
    return LoyaltySummaryResponse.model_validate(summary)


@router.get("/loyalty/transactions", response_model=LoyaltyTransactionPageResponse)
async def list_loyalty_transactions(
    user_id: UserId,
    language: Lang,
    page: int = Query(default=1),
    page_size: int = Query(default=20),
    use_cases=Depends(get_use_cases),
) -> LoyaltyTransactionPageResponse:
    result = await use_cases["loyalty_transactions"].execute(
        user_id, page=page, page_size=page_size, language=language
    )
    return LoyaltyTransactionPageResponse.model_validate(result)


@router.post("/loyalty/redeem", response_model=RedeemPointsResponse)
async def redeem_points(
    payload: RedeemPointsRequest,
    user_id: UserId,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> RedeemPointsResponse:
    result = await use_cases["redeem_points"].execute(
        user_id,
        payload.points,
        booking_id=payload.booking_id,
        description=payload.description,
        language=language,
    )
    return RedeemPointsResponse.model_validate(result)


@router.post(
    "/admin/loyalty/award",
    response_model=AwardPointsResponse,
    status_code=status.HTTP_200_OK,
)
async def award_points(
    payload: AwardPointsRequest,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> AwardPointsResponse:
    """Staff credit (bonuses, promotions). Authorization is enforced by the gateway."""
    result = await use_cases["award_points"].execute(
        user_id=payload.user_id,
        points=payload.points,
        reason=payload.reason,
        booking_id=payload.booking_id,
        description=payload.description,
        expiry_date=payload.expiry_date,
        language=language,
    )
    return AwardPointsResponse.model_validate(result)
