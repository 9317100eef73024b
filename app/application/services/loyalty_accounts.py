from datetime import datetime

from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.domain.entities.loyalty import LoyaltyAccount, LoyaltyBalance


async def replay_balance(loyalty_repo: LoyaltyRepo, user_id: str) -> LoyaltyBalance:
    transactions = await loyalty_repo.list_for_user(user_id)
    return LoyaltyBalance.replay(transactions)


async def refresh_account(loyalty_repo: LoyaltyRepo, user_id: str, now: datetime) -> LoyaltyAccount:
    """Recomputes the cached account from the ledger and stores it."""
    balance = await replay_balance(loyalty_repo, user_id)
    account = LoyaltyAccount.from_balance(user_id, balance, now)
    await loyalty_repo.save_account(account)
    return account
