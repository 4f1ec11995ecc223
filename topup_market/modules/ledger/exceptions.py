"""Error taxonomy surfaced by the balance ledger.

Every failure leaves no side effects. ``retryable`` is True only for
conflicts, where the caller should re-run the whole operation.
"""

from topup_market.modules.accounts.exceptions import (
    AccountNotFoundError,
    BalanceConflictError,
    BalanceLimitError,
    InsufficientFundsError,
)
from topup_market.modules.catalog.exceptions import ProductInactiveError, ProductNotFoundError
from topup_market.modules.common.exceptions import (
    ConflictError,
    DomainError,
    InactiveResourceError,
    NotFoundError,
    ValidationError,
)
from topup_market.modules.transactions.exceptions import InvalidTransitionError, TransactionNotFoundError

LedgerError = DomainError


class InvalidAmountError(ValidationError):
    code = "INVALID_AMOUNT"

    def __init__(self, amount) -> None:
        super().__init__(f"amount must be a positive value with at most 2 decimals: {amount}", amount=str(amount))
        self.amount = amount


class LedgerConflictError(ConflictError):
    """Exclusive access to the account could not be obtained in time."""

    code = "LEDGER_CONFLICT"
    retryable = True


class IdempotencyKeyReuseError(ConflictError):
    """The idempotency key already belongs to a different request."""

    code = "IDEMPOTENCY_KEY_REUSED"

    def __init__(self, key: str) -> None:
        super().__init__(f"idempotency key already used for another request: {key}", idempotency_key=key)


__all__ = [
    "AccountNotFoundError",
    "BalanceConflictError",
    "BalanceLimitError",
    "ConflictError",
    "IdempotencyKeyReuseError",
    "InactiveResourceError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidTransitionError",
    "LedgerConflictError",
    "LedgerError",
    "NotFoundError",
    "ProductInactiveError",
    "ProductNotFoundError",
    "TransactionNotFoundError",
]
