from app.application.dtos.loyalty_dto import (
    LoyaltySummaryDTO,
    LoyaltyTransactionDTO,
    LoyaltyTransactionPageDTO,
)
from app.application.error_boundary import error_boundary
from app.application.interfaces.clock import Clock
from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.constants import DEFAULT_RECENT_TRANSACTIONS_LIMIT
from app.domain.entities.loyalty import LoyaltyBalance
from app.domain.errors import ValidationError
from app.domain.labels import Language
from app.domain.value_objects.loyalty_policy import LoyaltyPolicy

MAX_PAGE_SIZE = 100


class GetLoyaltySummaryUseCase:
    """Balance figures replayed from the ledger, never read from the cached account."""

    def __init__(
        self,
        loyalty_repo: LoyaltyRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        policy: LoyaltyPolicy,
        recent_limit: int = DEFAULT_RECENT_TRANSACTIONS_LIMIT,
    ) -> None:
        self._loyalty_repo = loyalty_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._policy = policy
        self._recent_limit = recent_limit

    @error_boundary("get_loyalty_summary")
    async def execute(self, user_id: str, language: Language = Language.EN) -> LoyaltySummaryDTO:
        now = self._clock.now()
        async with self._transaction_manager.start():
            transactions = list(await self._loyalty_repo.list_for_user(user_id))

        balance = LoyaltyBalance.replay(transactions)
        cutoff = self._policy.expiring_soon_cutoff(now)
        expiring_soon = sum(txn.points for txn in transactions if txn.is_due_for_expiry(cutoff))

        return LoyaltySummaryDTO(
            user_id=user_id,
            available_points=balance.available_points,
            total_points=balance.total_points,
            lifetime_earned=balance.lifetime_earned,
            lifetime_redeemed=balance.lifetime_redeemed,
            points_value=self._policy.discount_for_points(balance.available_points),
            points_expiring_soon=expiring_soon,
            last_earned_at=balance.last_earned_at,
            recent_transactions=[
                LoyaltyTransactionDTO.from_entity(txn, language)
                for txn in transactions[: self._recent_limit]
            ],
        )


class ListLoyaltyTransactionsUseCase:
    def __init__(self, loyalty_repo: LoyaltyRepo, transaction_manager: TransactionManager) -> None:
        self._loyalty_repo = loyalty_repo
        self._transaction_manager = transaction_manager

    @error_boundary("list_loyalty_transactions")
    async def execute(
        self,
        user_id: str,
        page: int = 1,
        page_size: int = 20,
        language: Language = Language.EN,
    ) -> LoyaltyTransactionPageDTO:
        if page < 1:
            raise ValidationError("page", "Page must be 1 or greater")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationError("page_size", f"Page size must be between 1 and {MAX_PAGE_SIZE}")

        async with self._transaction_manager.start():
            total = await self._loyalty_repo.count_for_user(user_id)
            items = await self._loyalty_repo.list_for_user(
                user_id, offset=(page - 1) * page_size, limit=page_size
            )

        return LoyaltyTransactionPageDTO(
            items=[LoyaltyTransactionDTO.from_entity(txn, language) for txn in items],
            page=page,
            page_size=page_size,
            total_count=total,
        )
