"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_account_service,
    get_catalog_service,
    get_ledger_service,
    get_transaction_log,
)

__all__ = [
    "get_db_session",
    "get_account_service",
    "get_catalog_service",
    "get_ledger_service",
    "get_transaction_log",
]
