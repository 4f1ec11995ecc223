"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from topup_market.core.container import get_container
from topup_market.modules.accounts.service import AccountService
from topup_market.modules.catalog.service import CatalogService
from topup_market.modules.ledger.service import LedgerService
from topup_market.modules.transactions.service import TransactionLogService

from .database import get_db_session


def get_account_service(db: AsyncSession = Depends(get_db_session)) -> AccountService:
    return AccountService.with_session(db)


def get_catalog_service(db: AsyncSession = Depends(get_db_session)) -> CatalogService:
    return CatalogService.with_session(db)


def get_transaction_log(db: AsyncSession = Depends(get_db_session)) -> TransactionLogService:
    return TransactionLogService.with_session(db)


def get_ledger_service() -> LedgerService:
    # the ledger opens its own sessions per unit of work
    return get_container().ledger_service()


__all__ = [
    "get_account_service",
    "get_catalog_service",
    "get_ledger_service",
    "get_transaction_log",
]
