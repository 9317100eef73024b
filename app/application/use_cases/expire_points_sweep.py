import logging

from app.application.dtos.sweep_report import SweepReport
from app.application.error_boundary import error_boundary
from app.application.interfaces.clock import Clock
from app.application.interfaces.lock_manager import USER_SCOPE, LockManager
from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.loyalty_accounts import refresh_account

logger = logging.getLogger(__name__)


class ExpirePointsSweepUseCase:
    """
    Flags Earned/Bonus credits whose expiry date has passed.

    Runs one transaction per user. The is_expired = false guard makes a rerun,
    or two overlapping runs, flip each entry exactly once. succeeded counts
    the entries flipped.
    """

    def __init__(
        self,
        loyalty_repo: LoyaltyRepo,
        lock_manager: LockManager,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._loyalty_repo = loyalty_repo
        self._lock_manager = lock_manager
        self._transaction_manager = transaction_manager
        self._clock = clock

    @error_boundary("expire_points_sweep")
    async def execute(self) -> SweepReport:
        now = self._clock.now()
        report = SweepReport()

        async with self._transaction_manager.start():
            user_ids = await self._loyalty_repo.list_users_with_due_expiry(now)

        logger.info("Points expiry sweep started", extra={"users": len(user_ids)})

        for user_id in user_ids:
            try:
                async with self._transaction_manager.start():
                    async with self._lock_manager.hold(USER_SCOPE, user_id):
                        expired = await self._loyalty_repo.mark_expired(user_id, now)
                        if expired:
                            await refresh_account(self._loyalty_repo, user_id, now)
                report.succeeded += expired
            except Exception as exc:
                logger.error(
                    "Failed to expire loyalty points",
                    exc_info=exc,
                    extra={"user_id": user_id},
                )
                report.record_failure(user_id, exc)

        logger.info(
            "Points expiry sweep finished",
            extra={"expired": report.succeeded, "failed": report.failed},
        )
        return report
