"""Transaction log exports"""

from .exceptions import InvalidTransitionError, TransactionNotFoundError
from .models import (
    CANCELLED,
    FAILED,
    PENDING,
    PROCESSING,
    PURCHASE,
    SUCCESS,
    TOPUP,
    Transaction,
    can_transition,
)

__all__ = [
    "CANCELLED",
    "FAILED",
    "InvalidTransitionError",
    "PENDING",
    "PROCESSING",
    "PURCHASE",
    "SUCCESS",
    "TOPUP",
    "Transaction",
    "TransactionNotFoundError",
    "can_transition",
]
