from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_use_cases
from app.api.schemas.bookings import SweepReportResponse
from app.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()

# The scheduler that calls these lives outside the service.
#
# retry_on_deadlock only sees faults that escape a sweep, i.e. the listing
# query. Each item runs in its own transaction; a deadlock there lands in the
# report's failures and the item is picked up again by the next run.


@router.post(
    "/workers/bookings/cleanup",
    response_model=SweepReportResponse,
    status_code=status.HTTP_200_OK,
)
async def run_booking_cleanup(
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> SweepReportResponse:
    """Closes overdue bookings. A deadlock while listing them is retried."""

    async def execute_sweep():
        return await use_cases["cleanup_sweep"].execute()

    report = await retry_on_deadlock(execute_sweep, max_attempts=3, base_delay=0.1)
    return SweepReportResponse.model_validate(report)


@router.post(
    "/workers/loyalty/expire",
    response_model=SweepReportResponse,
    status_code=status.HTTP_200_OK,
)
async def run_points_expiry(
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> SweepReportResponse:
    """Expires due loyalty points. A deadlock while listing users is retried."""

    async def execute_sweep():
        return await use_cases["expire_points"].execute()

    report = await retry_on_deadlock(execute_sweep, max_attempts=3, base_delay=0.1)
    return SweepReportResponse.model_validate(report)
