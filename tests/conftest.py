"""Shared fixtures: a fresh SQLite database file per test."""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncIterator, Awaitable, Callable

import pytest

from topup_market.core.config import Settings, get_settings
from topup_market.core.container import get_container
from topup_market.infrastructure.database import dispose_engine, get_session_factory, init_db
from topup_market.infrastructure.database.repositories.catalog_repository import SqlCatalogRepository
from topup_market.modules.accounts import Account, AccountCreateInput
from topup_market.modules.accounts.service import AccountService
from topup_market.modules.catalog import Product
from topup_market.modules.ledger import AccountLockRegistry
from topup_market.modules.ledger.service import LedgerService


def _reset_caches() -> None:
    get_settings.cache_clear()
    get_container.cache_clear()


@pytest.fixture
async def settings(tmp_path, monkeypatch) -> AsyncIterator[Settings]:
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    monkeypatch.setenv("SECURITY__SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("LEDGER__LOCK_TIMEOUT_SECONDS", "5")
    _reset_caches()
    await dispose_engine()
    await init_db()
    yield get_settings()
    await dispose_engine()
    _reset_caches()


@pytest.fixture
def session_factory(settings):
    return get_session_factory()


@pytest.fixture
def make_ledger(settings, session_factory) -> Callable[..., LedgerService]:
    def _make(**overrides) -> LedgerService:
        ledger_settings = settings.ledger.model_copy(update=overrides) if overrides else settings.ledger
        return LedgerService(
            session_factory=session_factory,
            locks=AccountLockRegistry(),
            settings=ledger_settings,
        )

    return _make


@pytest.fixture
def ledger(make_ledger) -> LedgerService:
    return make_ledger()


@pytest.fixture
def create_account(session_factory) -> Callable[..., Awaitable[Account]]:
    counter = {"n": 0}

    async def _create(email: str | None = None, role: str = "user", phone_number: str | None = None) -> Account:
        counter["n"] += 1
        async with session_factory() as session:
            service = AccountService.with_session(session)
            account = await service.register(
                AccountCreateInput(
                    email=email or f"buyer{counter['n']}@example.com",
                    password="s3cret-pass",
                    full_name=f"Buyer {counter['n']}",
                    phone_number=phone_number,
                    role=role,
                )
            )
            await session.commit()
        return account

    return _create


@pytest.fixture
async def account(create_account) -> Account:
    return await create_account(phone_number="081234567890")



@pytest.fixture
async def catalog(session_factory) -> dict[str, Product]:
    async with session_factory() as session:
        repository = SqlCatalogRepository(session)
        games = await repository.create_provider(name="Mobile Legends", category="games")
        pulsa = await repository.create_provider(name="Telkomsel", category="pulsa")
        await repository.create_provider(name="Retired Shop", category="voucher", is_active=False)
        products = {
            "diamonds": await repository.create_product(
                provider_id=games.id, name="257 Diamonds", nominal_value="257", price=Decimal("25000")
            ),
            "small": await repository.create_product(
                provider_id=games.id, name="86 Diamonds", nominal_value="86", price=Decimal("10000")
            ),
            "retired": await repository.create_product(
                provider_id=games.id,
                name="Old Bundle",
                nominal_value="1",
                price=Decimal("5000"),
                is_active=False,
            ),
            "pulsa": await repository.create_product(
                provider_id=pulsa.id, name="Pulsa 10.000", nominal_value="10000", price=Decimal("11500.50")
            ),
        }
        await session.commit()
    return products

