"""Transaction history read path."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.core.config import LedgerSettings, get_settings
from topup_market.infrastructure.database.repositories.transaction_repository import SqlTransactionRepository
from topup_market.modules.common.exceptions import ValidationError

from .exceptions import TransactionNotFoundError
from .models import Transaction
from .repository import TransactionLogRepository


@dataclass(slots=True)
class TransactionLogService:
    repository: TransactionLogRepository
    settings: LedgerSettings

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionLogService":
        return cls(SqlTransactionRepository(session), get_settings().ledger)

    async def list_by_account(
        self,
        account_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Transaction]:
        """Committed transactions of ``account_id``, newest first."""
        limit = self.settings.default_history_limit if limit is None else limit
        offset = 0 if offset is None else offset
        if limit <= 0:
            raise ValidationError("limit must be positive", limit=limit)
        if offset < 0:
            raise ValidationError("offset must not be negative", offset=offset)
        limit = min(limit, self.settings.max_history_limit)
        rows = await self.repository.list_by_account(account_id, limit, offset)
        return list(rows)

    async def get(self, transaction_id: str, account_id: str | None = None) -> Transaction:
        transaction = await self.repository.get(transaction_id)
        # other accounts' records are reported as missing
        if transaction is None or (account_id is not None and transaction.account_id != account_id):
            raise TransactionNotFoundError(transaction_id)
        return transaction
