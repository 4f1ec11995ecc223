"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from topup_market.infrastructure.database.base import Base

SERVICE_CATEGORIES = (
    "games",
    "e_money",
    "pulsa",
    "data",
    "tlp_sms",
    "masa_aktif",
    "pln",
    "voucher",
    "streaming",
    "pascabayar",
)

TRANSACTION_STATUSES = ("pending", "processing", "success", "failed", "cancelled")
TRANSACTION_KINDS = ("purchase", "topup")

# precision/scale of every money column
MONEY = Numeric(15, 2, asdecimal=True)


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(150), nullable=False)
    phone_number = Column(String(32))
    role = Column(String(20), nullable=False, default="user")
    is_verified = Column(Boolean, nullable=False, default=False)
    balance = Column(MONEY, nullable=False, default=0)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    transactions = relationship("Transaction", back_populates="account")


class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    category = Column(Enum(*SERVICE_CATEGORIES, name="service_category"), nullable=False, index=True)
    logo_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    products = relationship("ServiceProduct", back_populates="provider")


class ServiceProduct(Base):
    __tablename__ = "service_products"
    __table_args__ = (CheckConstraint("price > 0", name="ck_service_products_price_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider_id = Column(Integer, ForeignKey("service_providers.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text)
    price = Column(MONEY, nullable=False)
    nominal_value = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    provider = relationship("ServiceProvider", back_populates="products")


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_account_created", "account_id", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    kind = Column(Enum(*TRANSACTION_KINDS, name="transaction_kind"), nullable=False)
    # null for top-ups
    product_id = Column(Integer, ForeignKey("service_products.id"), nullable=True)
    amount = Column(MONEY, nullable=False)
    status = Column(
        Enum(*TRANSACTION_STATUSES, name="transaction_status"),
        nullable=False,
        default="pending",
    )
    target = Column(String(255), nullable=False)
    reference_id = Column(String(100), unique=True, nullable=True)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    account = relationship("Account", back_populates="transactions")
    product = relationship("ServiceProduct")
