from decimal import Decimal

import pytest

from topup_market.core.crypto import hash_password, verify_password
from topup_market.modules.accounts import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    AccountCreateInput,
    AccountUpdateInput,
    InvalidCredentialsError,
)
from topup_market.modules.accounts.service import AccountService


async def test_register_starts_with_zero_balance(session_factory):
    async with session_factory() as session:
        service = AccountService.with_session(session)
        account = await service.register(
            AccountCreateInput(email="  Rina@Example.com ", password="long-enough", full_name="Rina")
        )
        await session.commit()

    assert account.email == "rina@example.com"
    assert account.balance == Decimal("0.00")
    assert account.version == 0
    assert account.role == "user"
    assert account.contact_identifier == "rina@example.com"
    assert account.created_at.tzinfo is not None


async def test_register_duplicate_email(create_account, session_factory):
    await create_account(email="dup@example.com")

    async with session_factory() as session:
        with pytest.raises(AccountAlreadyExistsError):
            await AccountService.with_session(session).register(
                AccountCreateInput(email="DUP@example.com", password="long-enough", full_name="Dup")
            )


@pytest.mark.parametrize(
    "payload",
    [
        AccountCreateInput(email="a@example.com", password="short", full_name="A"),
        AccountCreateInput(email="a@example.com", password="long-enough", full_name="   "),
        AccountCreateInput(email="a@example.com", password="x" * 73, full_name="A"),
    ],
)
async def test_register_rejects_bad_input(session_factory, payload):
    async with session_factory() as session:
        with pytest.raises(AccountError):
            await AccountService.with_session(session).register(payload)


async def test_authenticate(create_account, session_factory):
    account = await create_account(email="login@example.com")

    async with session_factory() as session:
        service = AccountService.with_session(session)
        found = await service.authenticate("Login@example.com", "s3cret-pass")
        assert found.id == account.id
        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("login@example.com", "wrong-pass")
        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("nobody@example.com", "s3cret-pass")


async def test_update_profile_only_touches_given_fields(account, session_factory):
    async with session_factory() as session:
        service = AccountService.with_session(session)
        renamed = await service.update_profile(account.id, AccountUpdateInput(full_name="New Name"))
        assert renamed.full_name == "New Name"
        assert renamed.phone_number == "081234567890"

        cleared = await service.update_profile(account.id, AccountUpdateInput(phone_number=None))
        assert cleared.full_name == "New Name"
        assert cleared.phone_number is None
        assert cleared.updated_at >= account.updated_at
        await session.commit()


async def test_profile_and_balance_of_unknown_account(session_factory):
    async with session_factory() as session:
        service = AccountService.with_session(session)
        assert await service.get_by_id("missing") is None
        with pytest.raises(AccountNotFoundError):
            await service.get_profile("missing")
        with pytest.raises(AccountNotFoundError):
            await service.get_balance("missing")


def test_password_hashing():
    hashed = hash_password("correct horse")
    assert verify_password("correct horse", hashed)
    assert not verify_password("battery staple", hashed)
    assert not verify_password("correct horse", "not-a-bcrypt-hash")
    assert not verify_password("x" * 100, hashed)
    with pytest.raises(ValueError):
        hash_password("x" * 73)
