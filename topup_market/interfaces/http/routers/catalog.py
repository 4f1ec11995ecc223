"""Public catalog browsing endpoints."""
from fastapi import APIRouter, Depends

from topup_market.interfaces.http.deps import get_catalog_service
from topup_market.modules.catalog.service import CatalogService
from topup_market.schemas import (
    CategoryListResponse,
    ProductListResponse,
    ProductResponse,
    ProviderListResponse,
    ServiceProviderResponse,
)

router = APIRouter()


@router.get("/categories", response_model=CategoryListResponse, summary="Categories with active providers")
async def list_categories(catalog: CatalogService = Depends(get_catalog_service)) -> CategoryListResponse:
    return CategoryListResponse(categories=await catalog.list_categories())


@router.get(
    "/categories/{category}/providers",
    response_model=ProviderListResponse,
    summary="Active providers in a category",
)
async def list_providers(
    category: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProviderListResponse:
    providers = await catalog.list_providers(category)
    return ProviderListResponse(
        providers=[ServiceProviderResponse.model_validate(provider) for provider in providers]
    )


@router.get(
    "/providers/{provider_id}/products",
    response_model=ProductListResponse,
    summary="Active products of a provider",
)
async def list_products(
    provider_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductListResponse:
    products = await catalog.list_products(provider_id)
    return ProductListResponse(products=[ProductResponse.model_validate(product) for product in products])


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Single product")
async def get_product(
    product_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    return ProductResponse.model_validate(await catalog.get_product(product_id))
