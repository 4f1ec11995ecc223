"""create account, catalog and transaction tables

Revision ID: 7c1e4f2a9b30
Revises: 
Create Date: 2026-10-16 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7c1e4f2a9b30"
down_revision = None
branch_labels = None
depends_on = None

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


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=150), nullable=False),
        sa.Column("phone_number", sa.String(length=32)),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("balance", sa.Numeric(15, 2), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "service_providers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("category", sa.Enum(*SERVICE_CATEGORIES, name="service_category"), nullable=False),
        sa.Column("logo_url", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_service_providers_category", "service_providers", ["category"])

    op.create_table(
        "service_products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("provider_id", sa.Integer(), sa.ForeignKey("service_providers.id"), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("price", sa.Numeric(15, 2), nullable=False),
        sa.Column("nominal_value", sa.String(length=100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price > 0", name="ck_service_products_price_positive"),
    )
    op.create_index("ix_service_products_provider_id", "service_products", ["provider_id"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("kind", sa.Enum("purchase", "topup", name="transaction_kind"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("service_products.id"), nullable=True),
        sa.Column("amount", sa.Numeric(15, 2), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "processing", "success", "failed", "cancelled", name="transaction_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("target", sa.String(length=255), nullable=False),
        sa.Column("reference_id", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        sa.UniqueConstraint("reference_id", name="uq_transactions_reference_id"),
    )
    op.create_index("ix_transactions_account_created", "transactions", ["account_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_transactions_account_created", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_service_products_provider_id", table_name="service_products")
    op.drop_table("service_products")
    op.drop_index("ix_service_providers_category", table_name="service_providers")
    op.drop_table("service_providers")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
    sa.Enum(name="transaction_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="transaction_kind").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="service_category").drop(op.get_bind(), checkfirst=True)
