"""
Create the back-office admin account.
The admin settles pending purchases through /api/admin/transactions/{id}/settle.
"""
import asyncio
import os

from topup_market.infrastructure.database import get_session_factory, init_db
from topup_market.modules.accounts import AccountAlreadyExistsError, AccountCreateInput
from topup_market.modules.accounts.service import AccountService

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin12345")


async def create_default_admin():
    await init_db()

    async with get_session_factory()() as session:
        service = AccountService.with_session(session)
        try:
            await service.register(
                AccountCreateInput(
                    email=ADMIN_EMAIL,
                    password=ADMIN_PASSWORD,
                    full_name="Administrator",
                    role="admin",
                )
            )
        except AccountAlreadyExistsError:
            print("Admin account already exists, nothing to do")
            return
        await session.commit()

    print("=" * 50)
    print("Admin account created")
    print(f"email: {ADMIN_EMAIL}")
    print(f"password: {ADMIN_PASSWORD}")
    print("Change the password after the first sign-in!")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
