"""Repository protocol for accounts (the Account Store)."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str, *, for_update: bool = False) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def create_account(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        phone_number: str | None,
        role: str,
    ) -> Account:
        ...

    async def update_profile(
        self,
        account_id: str,
        *,
        full_name: str,
        phone_number: str | None,
    ) -> Account:
        ...

    async def get_balance(self, account_id: str) -> Decimal:
        ...

    async def apply_delta(
        self,
        account_id: str,
        delta: Decimal,
        expected_min_result: Decimal = ...,
    ) -> Decimal:
        ...
