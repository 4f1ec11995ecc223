"""Balance ledger: the only write path to account balances and transactions.

Each operation runs as one unit of work. The unit holds the account's
in-process lock, opens a database transaction (row locks on PostgreSQL,
``BEGIN IMMEDIATE`` on SQLite), applies the balance change and writes the
transaction record, then commits both or neither. Cancelling the caller
mid-way rolls the unit back.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from decimal import Decimal

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from topup_market.core.config import LedgerSettings
from topup_market.infrastructure.database.repositories.account_repository import SqlAccountRepository
from topup_market.infrastructure.database.repositories.catalog_repository import SqlCatalogRepository
from topup_market.infrastructure.database.repositories.transaction_repository import SqlTransactionRepository
from topup_market.modules.accounts.models import Account
from topup_market.modules.common.exceptions import ValidationError
from topup_market.modules.common.money import quantize_amount
from topup_market.modules.transactions.models import (
    ALLOWED_TRANSITIONS,
    PENDING,
    PURCHASE,
    REFUNDED_STATUSES,
    SUCCESS,
    TOPUP,
    Transaction,
    can_transition,
)

from .exceptions import (
    AccountNotFoundError,
    IdempotencyKeyReuseError,
    InvalidAmountError,
    InvalidTransitionError,
    LedgerConflictError,
    ProductInactiveError,
    ProductNotFoundError,
    TransactionNotFoundError,
)
from .locks import AccountLockRegistry

logger = logging.getLogger(__name__)

MAX_KEY_LENGTH = 100


@dataclass(slots=True)
class _UnitOfWork:
    session: AsyncSession
    accounts: SqlAccountRepository = field(init=False)
    catalog: SqlCatalogRepository = field(init=False)
    log: SqlTransactionRepository = field(init=False)

    def __post_init__(self) -> None:
        self.accounts = SqlAccountRepository(self.session)
        self.catalog = SqlCatalogRepository(self.session)
        self.log = SqlTransactionRepository(self.session)


@dataclass(slots=True)
class LedgerService:
    session_factory: async_sessionmaker[AsyncSession]
    locks: AccountLockRegistry
    settings: LedgerSettings

    @asynccontextmanager
    async def _unit_of_work(self, account_id: str) -> AsyncIterator[_UnitOfWork]:
        async with self.locks.hold(account_id, timeout=self.settings.lock_timeout_seconds):
            try:
                async with self.session_factory() as session:
                    async with session.begin():
                        yield _UnitOfWork(session)
            except OperationalError as exc:
                # lock wait timeout / database busy: nothing was committed
                logger.warning("Database contention on account %s: %s", account_id, exc.orig)
                raise LedgerConflictError(
                    f"account {account_id} is busy, retry the request",
                    account_id=account_id,
                ) from exc

    async def purchase(
        self,
        *,
        account_id: str,
        product_id: int,
        target: str,
        notes: str | None = None,
        idempotency_key: str | None = None,
    ) -> Transaction:
        """Debit the product price and record the purchase.

        A repeated ``idempotency_key`` returns the stored transaction with
        ``replayed=True`` instead of charging again.
        """
        target = (target or "").strip()
        if not target:
            raise ValidationError("target is required")
        key = self._normalize_key(idempotency_key)

        try:
            async with self._unit_of_work(account_id) as uow:
                if key is not None:
                    prior = await self._find_prior(uow, key, account_id, PURCHASE)
                    if prior is not None:
                        return prior

                # authoritative read at the commit boundary, not a cached candidate
                product = await uow.catalog.get_product(product_id, for_share=True)
                if product is None:
                    raise ProductNotFoundError(product_id)
                if not product.is_active:
                    raise ProductInactiveError(product_id)

                account = await uow.accounts.get_by_id(account_id, for_update=True)
                if account is None:
                    raise AccountNotFoundError(account_id)

                amount = product.price
                new_balance = await uow.accounts.apply_delta(account_id, -amount)
                status = PENDING if self.settings.purchase_requires_fulfillment else SUCCESS
                transaction = await uow.log.append(
                    account_id=account_id,
                    kind=PURCHASE,
                    product_id=product.id,
                    amount=amount,
                    status=status,
                    target=target,
                    reference_id=key,
                    notes=notes,
                )
        except IntegrityError:
            # a concurrent request with the same key committed first
            if key is None:
                raise
            return await self._replay_after_collision(key, account_id, PURCHASE)

        logger.info(
            "Purchase %s: account=%s product=%s amount=%s balance=%s status=%s",
            transaction.id,
            account_id,
            product_id,
            amount,
            new_balance,
            transaction.status,
        )
        return transaction

    async def top_up(
        self,
        *,
        account_id: str,
        amount: Decimal | int | str,
        idempotency_key: str | None = None,
    ) -> Account:
        """Credit ``amount`` to the account and record a successful top-up.

        A repeated ``idempotency_key`` credits nothing and returns the current
        account with ``replayed=True``.
        """
        value = self._validate_amount(amount)
        key = self._normalize_key(idempotency_key)
        reference_id = key or f"{self.settings.topup_reference_prefix}-{uuid.uuid4().hex}"

        try:
            async with self._unit_of_work(account_id) as uow:
                if key is not None:
                    prior = await self._find_prior(uow, key, account_id, TOPUP)
                    if prior is not None:
                        account = await self._require_account(uow, account_id)
                        return replace(account, replayed=True)

                account = await self._require_account(uow, account_id, for_update=True)
                await uow.accounts.apply_delta(account_id, value)
                transaction = await uow.log.append(
                    account_id=account_id,
                    kind=TOPUP,
                    product_id=None,
                    amount=value,
                    status=SUCCESS,
                    target=account.contact_identifier,
                    reference_id=reference_id,
                    notes=f"Balance top-up of {value}",
                )
                account = await self._require_account(uow, account_id)
        except IntegrityError:
            if key is None:
                raise
            await self._replay_after_collision(key, account_id, TOPUP)
            async with self.session_factory() as session:
                account = await self._require_account(_UnitOfWork(session), account_id)
            return replace(account, replayed=True)

        logger.info(
            "Top-up %s: account=%s amount=%s balance=%s",
            transaction.id,
            account_id,
            value,
            account.balance,
        )
        return account

    async def settle(self, transaction_id: str, outcome: str) -> Transaction:
        """Apply a fulfillment outcome to a purchase.

        ``failed`` and ``cancelled`` give the debited amount back in the same
        unit as the status change. Terminal transactions never change again.
        """
        if outcome not in ALLOWED_TRANSITIONS:
            raise ValidationError(f"unknown transaction status: {outcome}", outcome=outcome)

        async with self.session_factory() as session:
            found = await SqlTransactionRepository(session).get(transaction_id)
        if found is None:
            raise TransactionNotFoundError(transaction_id)

        async with self._unit_of_work(found.account_id) as uow:
            current = await uow.log.get(transaction_id, for_update=True)
            if current is None:
                raise TransactionNotFoundError(transaction_id)
            if not can_transition(current.status, outcome):
                raise InvalidTransitionError(transaction_id, current.status, outcome)

            if current.kind == PURCHASE and outcome in REFUNDED_STATUSES:
                await uow.accounts.apply_delta(current.account_id, current.amount)
            settled = await uow.log.update_status(
                transaction_id,
                status=outcome,
                expected_status=current.status,
            )
            if settled is None:
                raise LedgerConflictError(
                    f"transaction {transaction_id} changed concurrently",
                    transaction_id=transaction_id,
                )

        logger.info("Settled %s: %s -> %s", transaction_id, current.status, outcome)
        return settled

    async def _find_prior(
        self,
        uow: _UnitOfWork,
        key: str,
        account_id: str,
        kind: str,
    ) -> Transaction | None:
        prior = await uow.log.get_by_reference(key)
        if prior is None:
            return None
        if prior.account_id != account_id or prior.kind != kind:
            raise IdempotencyKeyReuseError(key)
        logger.info("Replaying %s %s for key %s", kind, prior.id, key)
        return replace(prior, replayed=True)

    async def _replay_after_collision(self, key: str, account_id: str, kind: str) -> Transaction:
        async with self.session_factory() as session:
            prior = await self._find_prior(_UnitOfWork(session), key, account_id, kind)
        if prior is None:
            # the integrity error was about something other than the key
            raise LedgerConflictError(f"could not record request {key}", idempotency_key=key)
        return prior

    @staticmethod
    async def _require_account(uow: _UnitOfWork, account_id: str, *, for_update: bool = False) -> Account:
        account = await uow.accounts.get_by_id(account_id, for_update=for_update)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _validate_amount(self, amount: Decimal | int | str) -> Decimal:
        if isinstance(amount, float):
            amount = str(amount)
        try:
            value = quantize_amount(amount)
        except ValueError as exc:
            raise InvalidAmountError(amount) from exc
        if value <= 0 or value != Decimal(str(amount)) or value > self.settings.max_topup_amount:
            raise InvalidAmountError(amount)
        return value

    @staticmethod
    def _normalize_key(key: str | None) -> str | None:
        if key is None:
            return None
        key = key.strip()
        if not key:
            return None
        if len(key) > MAX_KEY_LENGTH:
            raise ValidationError(f"idempotency key longer than {MAX_KEY_LENGTH} characters")
        return key
