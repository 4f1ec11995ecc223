"""
Seed the catalog with a few providers and products for local development.
"""
import asyncio
from decimal import Decimal

from topup_market.infrastructure.database import get_session_factory, init_db
from topup_market.infrastructure.database.repositories.catalog_repository import SqlCatalogRepository

CATALOG = {
    ("Mobile Legends", "games"): [
        ("86 Diamonds", "86", Decimal("20000.00")),
        ("172 Diamonds", "172", Decimal("39000.00")),
        ("257 Diamonds", "257", Decimal("57500.00")),
    ],
    ("Telkomsel", "pulsa"): [
        ("Pulsa 10.000", "10000", Decimal("11500.00")),
        ("Pulsa 25.000", "25000", Decimal("25500.00")),
        ("Pulsa 50.000", "50000", Decimal("50500.00")),
    ],
    ("PLN Prepaid", "pln"): [
        ("Token 20.000", "20000", Decimal("21000.00")),
        ("Token 50.000", "50000", Decimal("51000.00")),
    ],
    ("GoPay", "e_money"): [
        ("Saldo 50.000", "50000", Decimal("51500.00")),
    ],
}


async def seed_catalog():
    await init_db()

    async with get_session_factory()() as session:
        repository = SqlCatalogRepository(session)
        if await repository.list_categories():
            print("Catalog already seeded")
            return

        count = 0
        for (provider_name, category), products in CATALOG.items():
            provider = await repository.create_provider(name=provider_name, category=category)
            for name, nominal, price in products:
                await repository.create_product(
                    provider_id=provider.id,
                    name=name,
                    nominal_value=nominal,
                    price=price,
                )
                count += 1
        await session.commit()

    print(f"Seeded {len(CATALOG)} providers and {count} products")


if __name__ == "__main__":
    asyncio.run(seed_catalog())
