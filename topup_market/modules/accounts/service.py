"""Domain services for account management."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.core.crypto import hash_password, verify_password
from topup_market.infrastructure.database.repositories.account_repository import SqlAccountRepository

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    InvalidCredentialsError,
)
from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET
from .repository import AccountRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class AccountService:
    """Registration, sign-in and profile use cases.

    Balances are read-only here; every balance write goes through the ledger.
    """

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_profile(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def get_balance(self, account_id: str) -> Decimal:
        return await self._repository.get_balance(account_id)

    async def register(self, payload: AccountCreateInput) -> Account:
        email = payload.email.strip().lower()
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise AccountError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not payload.full_name.strip():
            raise AccountError("full name is required")

        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError(email)

        try:
            password_hash = hash_password(payload.password)
        except ValueError as exc:
            raise AccountError(str(exc)) from exc

        try:
            account = await self._repository.create_account(
                email=email,
                password_hash=password_hash,
                full_name=payload.full_name.strip(),
                phone_number=payload.phone_number,
                role=payload.role,
            )
        except IntegrityError as exc:
            # lost a race with a concurrent sign-up for the same email
            raise AccountAlreadyExistsError(email) from exc
        logger.info("Registered account %s", account.id)
        return account

    async def authenticate(self, email: str, password: str) -> Account:
        account = await self._repository.get_by_email(email.strip().lower())
        if account is None or not verify_password(password, account.password_hash):
            raise InvalidCredentialsError()
        return account

    async def update_profile(self, account_id: str, payload: AccountUpdateInput) -> Account:
        current = await self.get_profile(account_id)

        full_name = (
            payload.full_name
            if payload.full_name is not UNSET and payload.full_name is not None
            else current.full_name
        )
        phone_number = (
            payload.phone_number
            if payload.phone_number is not UNSET
            else current.phone_number
        )

        return await self._repository.update_profile(
            account_id,
            full_name=full_name,
            phone_number=phone_number,
        )
