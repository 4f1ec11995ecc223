from decimal import Decimal

from topup_market.modules.accounts.service import AccountService
from topup_market.modules.transactions.models import Transaction
from topup_market.modules.transactions.service import TransactionLogService


async def balance_of(session_factory, account_id: str) -> Decimal:
    async with session_factory() as session:
        return await AccountService.with_session(session).get_balance(account_id)


async def history_of(session_factory, account_id: str, limit: int = 100) -> list[Transaction]:
    async with session_factory() as session:
        return await TransactionLogService.with_session(session).list_by_account(account_id, limit=limit)
