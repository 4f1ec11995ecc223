"""Domain model for ledger transaction records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from topup_market.modules.common.money import ZERO

PENDING = "pending"
PROCESSING = "processing"
SUCCESS = "success"
FAILED = "failed"
CANCELLED = "cancelled"

PURCHASE = "purchase"
TOPUP = "topup"

TERMINAL_STATUSES = frozenset({SUCCESS, FAILED, CANCELLED})
# statuses whose purchase debit has been given back to the account
REFUNDED_STATUSES = frozenset({FAILED, CANCELLED})

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    PENDING: frozenset({PROCESSING, SUCCESS, FAILED, CANCELLED}),
    PROCESSING: frozenset({SUCCESS, FAILED, CANCELLED}),
    SUCCESS: frozenset(),
    FAILED: frozenset(),
    CANCELLED: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


@dataclass(slots=True)
class Transaction:
    id: str
    account_id: str
    kind: str
    product_id: Optional[int]
    amount: Decimal
    status: str
    target: str
    reference_id: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    # set when the ledger answered an idempotent retry with this stored row
    replayed: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def signed_amount(self) -> Decimal:
        """Net effect of this record on the account balance."""
        if self.kind == TOPUP:
            return self.amount
        if self.status in REFUNDED_STATUSES:
            return ZERO
        return -self.amount
