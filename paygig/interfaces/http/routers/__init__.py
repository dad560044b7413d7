from fastapi import APIRouter

from paygig.interfaces.http.routers import accounts, catalog, telegram, wallet


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
    router.include_router(wallet.router, prefix="/wallet", tags=["wallet"])
    router.include_router(catalog.router, tags=["catalog"])
    return router


def create_webhook_router() -> APIRouter:
    router = APIRouter()
    router.include_router(telegram.router, prefix="/telegram", tags=["telegram"])
    return router


__all__ = [
    "create_api_router",
    "create_webhook_router",
]
