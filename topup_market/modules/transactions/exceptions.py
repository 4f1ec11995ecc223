"""Transaction log errors."""

from topup_market.modules.common.exceptions import ConflictError, NotFoundError


class TransactionNotFoundError(NotFoundError):
    code = "TRANSACTION_NOT_FOUND"

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"transaction not found: {transaction_id}", transaction_id=transaction_id)
        self.transaction_id = transaction_id


class InvalidTransitionError(ConflictError):
    """Requested status change is not allowed from the current status."""

    code = "INVALID_TRANSITION"

    def __init__(self, transaction_id: str, current: str, target: str) -> None:
        super().__init__(
            f"transaction {transaction_id} cannot move from {current} to {target}",
            transaction_id=transaction_id,
            current=current,
            target=target,
        )
        self.current = current
        self.target = target
