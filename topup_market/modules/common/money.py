"""Decimal helpers for money columns stored as NUMERIC(15, 2)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# NUMERIC(15, 2) holds at most 13 integer digits
MAX_AMOUNT = Decimal("9999999999999.99")


def quantize_amount(value: Decimal | int | str) -> Decimal:
    """Coerce ``value`` to a two-place Decimal, raising ValueError if it cannot be stored."""
    try:
        amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
        quantized = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"not a valid amount: {value!r}") from exc
    if not quantized.is_finite() or abs(quantized) > MAX_AMOUNT:
        raise ValueError(f"amount out of range: {value!r}")
    return quantized
