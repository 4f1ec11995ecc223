"""Catalog domain service (read paths used by the API)."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.infrastructure.database.repositories.catalog_repository import SqlCatalogRepository

from .exceptions import ProductNotFoundError, UnknownCategoryError
from .models import SERVICE_CATEGORIES, Product, ServiceProvider
from .repository import CatalogRepository


@dataclass(slots=True)
class CatalogService:
    repository: CatalogRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CatalogService":
        return cls(SqlCatalogRepository(session))

    async def get_product(self, product_id: int) -> Product:
        """Fetch a product as a purchase candidate.

        The ledger re-reads the product when it commits, so price and status
        returned here are informational only.
        """
        product = await self.repository.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def list_categories(self) -> list[str]:
        return list(await self.repository.list_categories())

    async def list_providers(self, category: str) -> list[ServiceProvider]:
        if category not in SERVICE_CATEGORIES:
            raise UnknownCategoryError(category)
        return list(await self.repository.list_providers(category))

    async def list_products(self, provider_id: int) -> list[Product]:
        return list(await self.repository.list_products(provider_id))
