import logging

from app.application.dtos.loyalty_dto import LoyaltyTransactionDTO, RedeemResultDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import USER_SCOPE, LockManager
from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.loyalty_accounts import refresh_account, replay_balance
from app.domain.entities.loyalty import LoyaltyTransaction, LoyaltyTransactionType
from app.domain.errors import InsufficientBalanceError, MinimumRedemptionNotMetError
from app.domain.labels import Language, describe
from app.domain.value_objects.loyalty_policy import LoyaltyPolicy


class RedeemPointsUseCase:
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

    @error_boundary("redeem_points")
    async def execute(
        self,
        user_id: str,
        points: int,
        booking_id: int | None = None,
        description: str | None = None,
        language: Language = Language.EN,
    ) -> RedeemResultDTO:
        if points < self._policy.min_redemption_points:
            raise MinimumRedemptionNotMetError(points, self._policy.min_redemption_points)

        now = self._clock.now()
        async with self._transaction_manager.start():
            # balance check and insert must not interleave with another write for this user
            async with self._lock_manager.hold(USER_SCOPE, user_id):
                balance = await replay_balance(self._loyalty_repo, user_id)
                if points > balance.available_points:
                    raise InsufficientBalanceError(points, balance.available_points)

                txn = await self._loyalty_repo.add(
                    LoyaltyTransaction(
                        user_id=user_id,
                        points=-points,
                        transaction_type=LoyaltyTransactionType.REDEEMED,
                        transaction_date=now,
                        description=description or describe(LoyaltyTransactionType.REDEEMED, language),
                        booking_id=booking_id,
                    )
                )
                account = await refresh_account(self._loyalty_repo, user_id, now)

        discount = self._policy.discount_for_points(points)
        self._logger.info(
            "Loyalty points redeemed",
            extra={
                "user_id": user_id,
                "points": points,
                "booking_id": booking_id,
                "discount_amount": str(discount),
            },
        )
        return RedeemResultDTO(
            user_id=user_id,
            points_redeemed=points,
            discount_amount=discount,
            available_points=account.available_points,
            transaction=LoyaltyTransactionDTO.from_entity(txn, language),
        )
