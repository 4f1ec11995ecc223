"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    full_name: str = Field(..., min_length=1, max_length=150)
    phone_number: Optional[str] = Field(default=None, max_length=32)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class TokenData(BaseModel):
    account_id: str
    email: str
    role: str


class AccountResponse(BaseModel):
    id: str
    email: str
    full_name: str
    phone_number: Optional[str] = None
    role: str
    is_verified: bool
    balance: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    replayed: bool = False

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    account: AccountResponse
    access_token: str
    token_type: str = "bearer"


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    phone_number: Optional[str] = Field(default=None, max_length=32)


class ServiceProviderResponse(BaseModel):
    id: int
    name: str
    category: str
    logo_url: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductResponse(BaseModel):
    id: int
    provider_id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    nominal_value: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryListResponse(BaseModel):
    categories: list[str]


class ProviderListResponse(BaseModel):
    providers: list[ServiceProviderResponse]


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class WalletBalanceResponse(BaseModel):
    account_id: str
    balance: Decimal


class TopUpRequest(BaseModel):
    # validated by the ledger so the error code is INVALID_AMOUNT
    amount: Decimal


class PurchaseRequest(BaseModel):
    product_id: int
    target: str = Field(..., min_length=1, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=1000)


class TransactionResponse(BaseModel):
    id: str
    account_id: str
    kind: str
    product_id: Optional[int] = None
    amount: Decimal
    status: str
    target: str
    reference_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    replayed: bool = False

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]


class SettleRequest(BaseModel):
    outcome: Literal["processing", "success", "failed", "cancelled"]


class ErrorDetail(BaseModel):
    code: str
    message: str
    retryable: bool = False
    context: Optional[dict] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail
