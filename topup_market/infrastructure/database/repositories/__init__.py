"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .catalog_repository import SqlCatalogRepository
from .transaction_repository import SqlTransactionRepository

__all__ = [
    "SqlAccountRepository",
    "SqlCatalogRepository",
    "SqlTransactionRepository",
]
