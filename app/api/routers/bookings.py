from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_use_cases
from app.api.deps import get_current_user_id, get_language
from app.api.schemas.bookings import (
    AdvanceBookingRequest,
    BookingResponse,
    CancelBookingRequest,
    CostEstimateResponse,
    CreateBookingRequest,
    EstimateCostRequest,
)
from app.application.dtos.booking_dto import CreateBookingDTO, ExtraRequestDTO
from app.domain.entities.booking import BookingStatus
from app.domain.labels import Language

router = APIRouter()

UserId = Annotated[str, Depends(get_current_user_id)]
Lang = Annotated[Language, Depends(get_language)]


@router.post(
    "/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    user_id: UserId,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    request = CreateBookingDTO(
        user_id=user_id,
        vehicle_id=payload.vehicle_id,
        pickup_location_id=payload.pickup_location_id,
        return_location_id=payload.return_location_id,
        start=payload.start_date,
        end=payload.end_date,
        extras=[ExtraRequestDTO(extra_id=e.extra_id, quantity=e.quantity) for e in payload.extras],
        notes=payload.notes,
    )
    booking = await use_cases["create_booking"].execute(request, language=language)
    return BookingResponse.model_validate(booking)


@router.post("/bookings/estimate", response_model=CostEstimateResponse)
async def estimate_booking_cost(
    payload: EstimateCostRequest,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> CostEstimateResponse:
    estimate = await use_cases["estimate_cost"].execute(
        vehicle_id=payload.vehicle_id,
        pickup_location_id=payload.pickup_location_id,
        return_location_id=payload.return_location_id,
        start=payload.start_date,
        end=payload.end_date,
        extras=[ExtraRequestDTO(extra_id=e.extra_id, quantity=e.quantity) for e in payload.extras],
        language=language,
    )
    return CostEstimateResponse.model_validate(estimate)


@router.get("/bookings", response_model=list[BookingResponse])
async def list_my_bookings(
    user_id: UserId,
    language: Lang,
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    use_cases=Depends(get_use_cases),
) -> list[BookingResponse]:
    bookings = await use_cases["list_bookings"].execute(
        user_id, status=status_filter, language=language
    )
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    user_id: UserId,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    booking = await use_cases["get_booking"].execute(booking_id, user_id, language=language)
    return BookingResponse.model_validate(booking)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    user_id: UserId,
    language: Lang,
    payload: CancelBookingRequest | None = None,
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    booking = await use_cases["cancel_booking"].execute(
        booking_id,
        user_id,
        reason=payload.reason if payload else None,
        language=language,
    )
    return BookingResponse.model_validate(booking)


@router.post("/admin/bookings/{booking_id}/status", response_model=BookingResponse)
async def advance_booking(
    booking_id: int,
    payload: AdvanceBookingRequest,
    language: Lang,
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    """Staff status change. Authorization is enforced by the gateway."""
    booking = await use_cases["advance_booking"].execute(
        booking_id, payload.status, language=language
    )
    return BookingResponse.model_validate(booking)
