"""Domain models for the service catalog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from topup_market.db.models import SERVICE_CATEGORIES

__all__ = ["SERVICE_CATEGORIES", "Product", "ServiceProvider"]


@dataclass(slots=True)
class ServiceProvider:
    id: int
    name: str
    category: str
    is_active: bool
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class Product:
    id: int
    provider_id: int
    name: str
    price: Decimal
    nominal_value: str
    is_active: bool
    description: Optional[str] = None
    created_at: Optional[datetime] = None
