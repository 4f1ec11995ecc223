"""Account domain exports"""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    BalanceConflictError,
    BalanceLimitError,
    InsufficientFundsError,
    InvalidCredentialsError,
)
from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountError",
    "AccountNotFoundError",
    "AccountUpdateInput",
    "BalanceConflictError",
    "BalanceLimitError",
    "InsufficientFundsError",
    "InvalidCredentialsError",
    "UNSET",
]
