"""Shared domain building blocks."""

from .exceptions import (
    ConflictError,
    DomainError,
    InactiveResourceError,
    NotFoundError,
    ValidationError,
)
from .money import quantize_amount

__all__ = [
    "ConflictError",
    "DomainError",
    "InactiveResourceError",
    "NotFoundError",
    "ValidationError",
    "quantize_amount",
]
