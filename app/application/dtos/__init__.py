"""DTOs (Data Transfer Objects) of the application layer."""

from app.application.dtos.booking_dto import (
    BookingDTO,
    BookingLineDTO,
    CostEstimateDTO,
    CreateBookingDTO,
    ExtraRequestDTO,
    PricedExtraDTO,
)
from app.application.dtos.loyalty_dto import (
    AwardResultDTO,
    LoyaltySummaryDTO,
    LoyaltyTransactionDTO,
    LoyaltyTransactionPageDTO,
    RedeemResultDTO,
)
from app.application.dtos.sweep_report import SweepFailure, SweepReport

__all__ = [
    # Booking DTOs
    "CreateBookingDTO",
    "ExtraRequestDTO",
    "BookingDTO",
    "BookingLineDTO",
    "PricedExtraDTO",
    "CostEstimateDTO",
    # Loyalty DTOs
    "LoyaltyTransactionDTO",
    "AwardResultDTO",
    "RedeemResultDTO",
    "LoyaltySummaryDTO",
    "LoyaltyTransactionPageDTO",
    # Sweeps
    "SweepReport",
    "SweepFailure",
]
