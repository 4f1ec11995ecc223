from decimal import Decimal

import pytest

from topup_market.modules.catalog import ProductNotFoundError, UnknownCategoryError
from topup_market.modules.catalog.service import CatalogService


async def test_categories_only_list_active_providers(catalog, session_factory):
    async with session_factory() as session:
        categories = await CatalogService.with_session(session).list_categories()

    # the voucher provider is inactive
    assert categories == ["games", "pulsa"]


async def test_providers_and_products(catalog, session_factory):
    async with session_factory() as session:
        service = CatalogService.with_session(session)
        (provider,) = await service.list_providers("games")
        products = await service.list_products(provider.id)

    assert provider.name == "Mobile Legends"
    assert [p.name for p in products] == ["86 Diamonds", "257 Diamonds"]
    assert products[0].price == Decimal("10000.00")


async def test_unknown_category_and_product(catalog, session_factory):
    async with session_factory() as session:
        service = CatalogService.with_session(session)
        with pytest.raises(UnknownCategoryError):
            await service.list_providers("lottery")
        assert await service.list_providers("streaming") == []
        with pytest.raises(ProductNotFoundError):
            await service.get_product(424242)


async def test_inactive_product_is_still_readable(catalog, session_factory):
    async with session_factory() as session:
        product = await CatalogService.with_session(session).get_product(catalog["retired"].id)

    assert product.is_active is False
