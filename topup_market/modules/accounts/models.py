"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True)
class Account:
    id: str
    email: str
    full_name: str
    balance: Decimal
    version: int
    role: str = "user"
    is_verified: bool = False
    phone_number: Optional[str] = None
    password_hash: str = field(default="", repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # set when the ledger answered an idempotent top-up retry
    replayed: bool = False

    @property
    def contact_identifier(self) -> str:
        """Phone number when known, email otherwise."""
        return self.phone_number or self.email

    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(slots=True)
class AccountCreateInput:
    email: str
    password: str
    full_name: str
    phone_number: Optional[str] = None
    role: str = "user"


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    full_name: Optional[str] | object = UNSET
    phone_number: Optional[str] | object = UNSET
