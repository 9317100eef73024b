import logging
from datetime import datetime
from decimal import Decimal

from app.application.dtos.loyalty_dto import AwardResultDTO, LoyaltyTransactionDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import USER_SCOPE, LockManager
from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.loyalty_accounts import refresh_account
from app.domain.entities.loyalty import (
    LoyaltyEarnReason,
    LoyaltyTransaction,
    LoyaltyTransactionType,
)
from app.domain.errors import DuplicateAwardError, ValidationError
from app.domain.labels import Language, describe
from app.domain.value_objects.date_range import as_utc
from app.domain.value_objects.loyalty_policy import LoyaltyPolicy


class AwardPointsUseCase:
    """
    Credits points to a user.

    Awards tied to a booking are idempotent: a second award for the same
    (user, booking) returns already_awarded and writes nothing. The existence
    check is only a fast path; the storage uniqueness key is what guarantees it.
    """

    def __init__(
        self,
        loyalty_repo: LoyaltyRepo,
        lock_manager: LockManager,
        transaction_manager: TransactionManager,
        clock: Clock,
        policy: LoyaltyPolicy,
    ) -> None:
        self._loyalty_repo = loyalty_repo
        self._lock_manager = lock_manager
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._policy = policy
        self._logger = logging.getLogger(__name__)

    @error_boundary("award_points")
    async def execute(
        self,
        user_id: str,
        points: int,
        reason: LoyaltyEarnReason = LoyaltyEarnReason.BOOKING_COMPLETED,
        booking_id: int | None = None,
        description: str | None = None,
        expiry_date: datetime | None = None,
        language: Language = Language.EN,
    ) -> AwardResultDTO:
        if points <= 0:
            raise ValidationError("points", "Points to award must be greater than 0")

        now = self._clock.now()
        async with self._transaction_manager.start():
            async with self._lock_manager.hold(USER_SCOPE, user_id):
                if booking_id is not None and await self._loyalty_repo.has_earned_for_booking(
                    user_id, booking_id
                ):
                    return self._already_awarded(user_id, booking_id)

                txn = LoyaltyTransaction(
                    user_id=user_id,
                    points=points,
                    transaction_type=LoyaltyTransactionType.EARNED,
                    transaction_date=now,
                    earn_reason=reason,
                    description=description or describe(reason, language),
                    booking_id=booking_id,
                    expiry_date=as_utc(expiry_date) if expiry_date else self._policy.expiry_from(now),
                )
                try:
                    txn = await self._loyalty_repo.add(txn)
                except DuplicateAwardError:
                    return self._already_awarded(user_id, booking_id)

                account = await refresh_account(self._loyalty_repo, user_id, now)

        self._logger.info(
            "Loyalty points awarded",
            extra={
                "user_id": user_id,
                "points": points,
                "reason": reason.value,
                "booking_id": booking_id,
            },
        )
        return AwardResultDTO(
            user_id=user_id,
            awarded=True,
            transaction=LoyaltyTransactionDTO.from_entity(txn, language),
            available_points=account.available_points,
        )

    def _already_awarded(self, user_id: str, booking_id: int | None) -> AwardResultDTO:
        self._logger.info(
            "Loyalty points already awarded for booking",
            extra={"user_id": user_id, "booking_id": booking_id},
        )
        return AwardResultDTO(user_id=user_id, awarded=False, already_awarded=True)


class ProcessBookingPointsUseCase:
    """Awards the points earned by a completed booking's final amount."""

    def __init__(self, award_points: AwardPointsUseCase, policy: LoyaltyPolicy) -> None:
        self._award_points = award_points
        self._policy = policy

    async def execute(
        self,
        user_id: str,
        booking_id: int,
        amount: Decimal,
        language: Language = Language.EN,
    ) -> AwardResultDTO:
        points = self._policy.points_for_amount(amount)
        if points <= 0:
            return AwardResultDTO(user_id=user_id, awarded=False)
        return await self._award_points.execute(
            user_id=user_id,
            points=points,
            reason=LoyaltyEarnReason.BOOKING_COMPLETED,
            booking_id=booking_id,
            language=language,
        )
