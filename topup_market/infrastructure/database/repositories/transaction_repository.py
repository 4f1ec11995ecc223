"""SQLAlchemy implementation for the transaction log"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.db.models import Transaction as TransactionModel
from topup_market.modules.common.clock import as_utc, utcnow
from topup_market.modules.common.money import quantize_amount
from topup_market.modules.transactions.models import Transaction


class SqlTransactionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

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
        now = utcnow()
        tx = TransactionModel(
            account_id=account_id,
            kind=kind,
            product_id=product_id,
            amount=quantize_amount(amount),
            status=status,
            target=target,
            reference_id=reference_id,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        self.session.add(tx)
        await self.session.flush()
        return self._to_domain(tx)

    async def get(self, transaction_id: str, *, for_update: bool = False) -> Transaction | None:
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def get_by_reference(self, reference_id: str) -> Transaction | None:
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.reference_id == reference_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def update_status(
        self,
        transaction_id: str,
        *,
        status: str,
        expected_status: str,
    ) -> Transaction | None:
        """Move to ``status`` only if the row still has ``expected_status``."""
        stmt = (
            update(TransactionModel)
            .where(
                TransactionModel.id == transaction_id,
                TransactionModel.status == expected_status,
            )
            .values(status=status, updated_at=utcnow())
            .execution_options(synchronize_session=False)
            .returning(TransactionModel.id)
        )
        result = await self.session.execute(stmt)
        if result.first() is None:
            return None
        return await self.get(transaction_id)

    async def list_by_account(self, account_id: str, limit: int, offset: int) -> Sequence[Transaction]:
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.account_id == account_id)
            .order_by(desc(TransactionModel.created_at), desc(TransactionModel.id))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    @staticmethod
    def _to_domain(model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            account_id=model.account_id,
            kind=model.kind,
            product_id=model.product_id,
            amount=quantize_amount(model.amount),
            status=model.status,
            target=model.target,
            reference_id=model.reference_id,
            notes=model.notes,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
