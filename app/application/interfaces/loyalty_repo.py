from datetime import datetime
from typing import Sequence

from app.domain.entities.loyalty import LoyaltyAccount, LoyaltyTransaction


class LoyaltyRepo:
    async def add(self, transaction: LoyaltyTransaction) -> LoyaltyTransaction:
        """
        Appends a ledger entry and assigns its id.

        Raises:
            DuplicateAwardError: an Earned entry already exists for the same
                (user, booking).
        """
        raise NotImplementedError

    async def has_earned_for_booking(self, user_id: str, booking_id: int) -> bool:
        raise NotImplementedError

    async def list_for_user(
        self,
        user_id: str,
        offset: int = 0,
        limit: int | None = None,
    ) -> Sequence[LoyaltyTransaction]:
        """Newest first."""
        raise NotImplementedError

    async def count_for_user(self, user_id: str) -> int:
        raise NotImplementedError

    async def list_users_with_due_expiry(self, moment: datetime) -> Sequence[str]:
        """Users owning non-expired Earned/Bonus entries with expiry_date <= moment."""
        raise NotImplementedError

    async def mark_expired(self, user_id: str, moment: datetime) -> int:
        """
        Flags the user's due entries as expired.

        Only entries still flagged is_expired = false are touched; returns how
        many were flipped.
        """
        raise NotImplementedError

    async def save_account(self, account: LoyaltyAccount) -> None:
        """Insert or update the cached projection."""
        raise NotImplementedError
