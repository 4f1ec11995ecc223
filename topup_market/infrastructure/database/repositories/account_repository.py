"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.db.models import Account as AccountModel
from topup_market.modules.accounts.exceptions import (
    AccountNotFoundError,
    BalanceConflictError,
    BalanceLimitError,
    InsufficientFundsError,
)
from topup_market.modules.accounts.models import Account
from topup_market.modules.accounts.repository import AccountRepository
from topup_market.modules.common.clock import as_utc, utcnow
from topup_market.modules.common.money import ZERO, quantize_amount


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(self, account_id: str, *, for_update: bool = False) -> AccountModel | None:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, account_id: str, *, for_update: bool = False) -> Account | None:
        return self._to_domain(await self._get_model(account_id, for_update=for_update))

    async def get_by_email(self, email: str) -> Account | None:
        stmt = (
            select(AccountModel)
            .where(AccountModel.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create_account(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        phone_number: str | None,
        role: str,
    ) -> Account:
        now = utcnow()
        model = AccountModel(
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            phone_number=phone_number,
            role=role,
            is_verified=False,
            balance=ZERO,
            version=0,
            created_at=now,
            updated_at=now,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_profile(
        self,
        account_id: str,
        *,
        full_name: str,
        phone_number: str | None,
    ) -> Account:
        model = await self._get_model(account_id, for_update=True)
        if model is None:
            raise AccountNotFoundError(account_id)

        model.full_name = full_name
        model.phone_number = phone_number
        model.updated_at = self._next_timestamp(model.updated_at)

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get_balance(self, account_id: str) -> Decimal:
        stmt = select(AccountModel.balance).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        balance = result.scalar_one_or_none()
        if balance is None:
            raise AccountNotFoundError(account_id)
        return quantize_amount(balance)

    async def apply_delta(
        self,
        account_id: str,
        delta: Decimal,
        expected_min_result: Decimal = ZERO,
    ) -> Decimal:
        """Add ``delta`` to the balance, refusing results below ``expected_min_result``.

        The row is read under ``FOR UPDATE`` and written back with a version
        compare-and-swap in the same transaction, so a concurrent writer either
        waits on the row lock or makes this update match zero rows.
        """
        model = await self._get_model(account_id, for_update=True)
        if model is None:
            raise AccountNotFoundError(account_id)

        current = quantize_amount(model.balance)
        try:
            new_balance = quantize_amount(current + delta)
        except ValueError as exc:
            raise BalanceLimitError(account_id, balance=current, delta=delta) from exc
        if new_balance < expected_min_result:
            raise InsufficientFundsError(account_id, balance=current, required=-delta)

        seen_version = model.version
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id, AccountModel.version == seen_version)
            .values(
                balance=new_balance,
                version=seen_version + 1,
                updated_at=self._next_timestamp(model.updated_at),
            )
            .execution_options(synchronize_session=False)
            .returning(AccountModel.balance)
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            raise BalanceConflictError(account_id)
        return quantize_amount(row[0])

    @staticmethod
    def _next_timestamp(previous: datetime | None) -> datetime:
        # updated_at never moves backwards, even if the clock does
        now = utcnow()
        previous = as_utc(previous)
        if previous is not None and previous > now:
            return previous
        return now

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            email=model.email,
            full_name=model.full_name,
            phone_number=model.phone_number,
            role=model.role or "user",
            is_verified=bool(model.is_verified),
            balance=quantize_amount(model.balance),
            version=model.version,
            password_hash=model.password_hash,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
