"""Repository protocol for the read-only catalog."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Product, ServiceProvider


class CatalogRepository(Protocol):
    async def get_product(self, product_id: int, *, for_share: bool = False) -> Product | None:
        ...

    async def list_categories(self) -> Sequence[str]:
        ...

    async def list_providers(self, category: str) -> Sequence[ServiceProvider]:
        ...

    async def list_products(self, provider_id: int) -> Sequence[Product]:
        ...
