from fastapi import APIRouter

from topup_market.interfaces.http.routers import account, admin, auth, catalog, wallet


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(account.router, prefix="/account", tags=["account"])
    router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
    router.include_router(wallet.router, prefix="/wallet", tags=["wallet"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    return router


__all__ = [
    "create_api_router",
]
