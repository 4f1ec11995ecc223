"""Repository protocol for the append-only transaction log."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from .models import Transaction


class TransactionLogRepository(Protocol):
    async def append(
        self,
        *,
        account_id: str,
        kind: str,
        product_id: int | None,
        amount: Decimal,
        status: str,
        target: str,
        reference_id: str | None,
        notes: str | None,
    ) -> Transaction:
        ...

    async def get(self, transaction_id: str, *, for_update: bool = False) -> Transaction | None:
        ...

    async def get_by_reference(self, reference_id: str) -> Transaction | None:
        ...

    async def update_status(self, transaction_id: str, *, status: str, expected_status: str) -> Transaction | None:
        ...

    async def list_by_account(self, account_id: str, limit: int, offset: int) -> Sequence[Transaction]:
        ...
