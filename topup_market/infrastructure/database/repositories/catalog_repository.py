"""SQLAlchemy implementation for the catalog repository"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.db.models import ServiceProduct, ServiceProvider as ServiceProviderModel
from topup_market.modules.catalog.models import Product, ServiceProvider
from topup_market.modules.common.money import quantize_amount


class SqlCatalogRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_product(self, product_id: int, *, for_share: bool = False) -> Product | None:
        stmt = (
            select(ServiceProduct)
            .where(ServiceProduct.id == product_id)
            .execution_options(populate_existing=True)
        )
        if for_share:
            # FOR SHARE on PostgreSQL: price and status cannot change until we commit
            stmt = stmt.with_for_update(read=True)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_product(model) if model else None

    async def list_categories(self) -> list[str]:
        stmt = (
            select(ServiceProviderModel.category)
            .where(ServiceProviderModel.is_active.is_(True))
            .distinct()
        )
        result = await self.session.execute(stmt)
        return sorted(result.scalars().all())

    async def list_providers(self, category: str) -> list[ServiceProvider]:
        stmt = (
            select(ServiceProviderModel)
            .where(
                ServiceProviderModel.category == category,
                ServiceProviderModel.is_active.is_(True),
            )
            .order_by(ServiceProviderModel.name)
        )
        result = await self.session.execute(stmt)
        return [self._to_provider(row) for row in result.scalars().all()]

    async def list_products(self, provider_id: int) -> list[Product]:
        stmt = (
            select(ServiceProduct)
            .where(
                ServiceProduct.provider_id == provider_id,
                ServiceProduct.is_active.is_(True),
            )
            .order_by(ServiceProduct.price, ServiceProduct.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_product(row) for row in result.scalars().all()]

    async def create_provider(
        self,
        *,
        name: str,
        category: str,
        logo_url: str | None = None,
        is_active: bool = True,
    ) -> ServiceProvider:
        model = ServiceProviderModel(name=name, category=category, logo_url=logo_url, is_active=is_active)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_provider(model)

    async def create_product(
        self,
        *,
        provider_id: int,
        name: str,
        price: Decimal,
        nominal_value: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> Product:
        model = ServiceProduct(
            provider_id=provider_id,
            name=name,
            price=quantize_amount(price),
            nominal_value=nominal_value,
            description=description,
            is_active=is_active,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_product(model)

    async def set_product_state(
        self,
        product_id: int,
        *,
        price: Decimal | None = None,
        is_active: bool | None = None,
    ) -> Product | None:
        stmt = select(ServiceProduct).where(ServiceProduct.id == product_id)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        if model is None:
            return None
        if price is not None:
            model.price = quantize_amount(price)
        if is_active is not None:
            model.is_active = is_active
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_product(model)

    @staticmethod
    def _to_provider(model: ServiceProviderModel) -> ServiceProvider:
        return ServiceProvider(
            id=model.id,
            name=model.name,
            category=model.category,
            is_active=bool(model.is_active),
            logo_url=model.logo_url,
            created_at=model.created_at,
        )

    @staticmethod
    def _to_product(model: ServiceProduct) -> Product:
        return Product(
            id=model.id,
            provider_id=model.provider_id,
            name=model.name,
            price=quantize_amount(model.price),
            nominal_value=model.nominal_value,
            is_active=bool(model.is_active),
            description=model.description,
            created_at=model.created_at,
        )
