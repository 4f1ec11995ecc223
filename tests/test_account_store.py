from decimal import Decimal

import pytest
from sqlalchemy import update

from topup_market.db.models import Account as AccountModel
from topup_market.infrastructure.database.repositories.account_repository import SqlAccountRepository
from topup_market.modules.accounts import (
    AccountNotFoundError,
    BalanceConflictError,
    BalanceLimitError,
    InsufficientFundsError,
)
from topup_market.modules.common.money import MAX_AMOUNT

from tests.helpers import balance_of


async def _credit(session_factory, account_id, amount):
    async with session_factory() as session:
        async with session.begin():
            return await SqlAccountRepository(session).apply_delta(account_id, amount)


async def test_apply_delta_honours_expected_minimum(account, session_factory):
    await _credit(session_factory, account.id, Decimal("100"))

    async with session_factory() as session:
        async with session.begin():
            repository = SqlAccountRepository(session)
            assert await repository.apply_delta(
                account.id, Decimal("-30"), expected_min_result=Decimal("50")
            ) == Decimal("70.00")

    with pytest.raises(InsufficientFundsError):
        async with session_factory() as session:
            async with session.begin():
                await SqlAccountRepository(session).apply_delta(
                    account.id, Decimal("-30"), expected_min_result=Decimal("50")
                )

    assert await balance_of(session_factory, account.id) == Decimal("70.00")


async def test_apply_delta_loses_compare_and_swap_on_stale_version(account, session_factory):
    await _credit(session_factory, account.id, Decimal("100"))

    async with session_factory() as session:
        repository = SqlAccountRepository(session)
        read_row = repository._get_model

        async def read_then_concurrent_write(account_id, *, for_update=False):
            model = await read_row(account_id, for_update=for_update)
            # another writer commits between our read and our update
            await session.execute(
                update(AccountModel)
                .where(AccountModel.id == account_id)
                .values(version=AccountModel.version + 1)
                .execution_options(synchronize_session=False)
            )
            return model

        repository._get_model = read_then_concurrent_write
        with pytest.raises(BalanceConflictError) as excinfo:
            await repository.apply_delta(account.id, Decimal("-10"))
        await session.rollback()

    assert excinfo.value.retryable is True
    assert await balance_of(session_factory, account.id) == Decimal("100.00")


async def test_apply_delta_refuses_balance_beyond_column_limit(account, session_factory):
    await _credit(session_factory, account.id, MAX_AMOUNT)

    with pytest.raises(BalanceLimitError):
        await _credit(session_factory, account.id, Decimal("0.01"))

    assert await balance_of(session_factory, account.id) == MAX_AMOUNT


async def test_apply_delta_unknown_account(session_factory, settings):
    with pytest.raises(AccountNotFoundError):
        await _credit(session_factory, "missing", Decimal("1"))
