"""Balance ledger exports"""

from .exceptions import (
    IdempotencyKeyReuseError,
    InvalidAmountError,
    LedgerConflictError,
    LedgerError,
)
from .locks import AccountLockRegistry

__all__ = [
    "AccountLockRegistry",
    "IdempotencyKeyReuseError",
    "InvalidAmountError",
    "LedgerConflictError",
    "LedgerError",
]
