"""Base error taxonomy shared by every domain module.

Each error carries a stable ``code`` for API responses and a ``retryable``
flag so callers can tell a transient conflict from a terminal failure.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    code = "DOMAIN_ERROR"
    retryable = False

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class NotFoundError(DomainError):
    code = "NOT_FOUND"


class InactiveResourceError(DomainError):
    code = "INACTIVE_RESOURCE"


class ValidationError(DomainError):
    code = "VALIDATION_ERROR"


class ConflictError(DomainError):
    code = "CONFLICT"
