"""Account domain specific exceptions."""

from topup_market.modules.common.exceptions import ConflictError, DomainError, NotFoundError, ValidationError


class AccountError(DomainError):
    """Base class for account domain errors."""

    code = "ACCOUNT_ERROR"


class AccountAlreadyExistsError(AccountError, ConflictError):
    """Raised when registering an email that is already taken."""

    code = "ACCOUNT_ALREADY_EXISTS"

    def __init__(self, email: str) -> None:
        super().__init__(f"account already exists: {email}", email=email)


class AccountNotFoundError(AccountError, NotFoundError):
    """Raised when the requested account cannot be found."""

    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str) -> None:
        super().__init__(f"account not found: {account_id}", account_id=account_id)
        self.account_id = account_id


class InvalidCredentialsError(AccountError):
    code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("invalid email or password")


class InsufficientFundsError(AccountError):
    """The balance cannot cover the requested debit; nothing was written."""

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, account_id: str, balance, required) -> None:
        super().__init__(
            f"insufficient balance: have {balance}, need {required}",
            account_id=account_id,
            balance=str(balance),
            required=str(required),
        )
        self.account_id = account_id
        self.balance = balance
        self.required = required


class BalanceConflictError(AccountError, ConflictError):
    """The balance row changed between read and write; retry the whole operation."""

    code = "BALANCE_CONFLICT"
    retryable = True

    def __init__(self, account_id: str) -> None:
        super().__init__(f"concurrent balance update on account {account_id}", account_id=account_id)
        self.account_id = account_id


class BalanceLimitError(AccountError, ValidationError):
    """The resulting balance would not fit the balance column; nothing was written."""

    code = "BALANCE_LIMIT_EXCEEDED"

    def __init__(self, account_id: str, balance, delta) -> None:
        super().__init__(
            f"balance limit exceeded: {balance} + {delta}",
            account_id=account_id,
            balance=str(balance),
            delta=str(delta),
        )
        self.account_id = account_id
