"""Initial catalog schema.

Revision ID: 3b9e1c7a5d20
Revises:
Create Date: 2026-10-17 09:12:44
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "3b9e1c7a5d20"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.create_table(
        "currency",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("iso_code", sa.String(length=3), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_currency")),
        sa.UniqueConstraint("iso_code", name=op.f("uq_currency_currency_iso_code")),
    )
    op.create_table(
        "product",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("version_id", sa.String(length=32), nullable=False),
        sa.Column("parent_id", sa.String(length=32), nullable=True),
        sa.Column("product_number", sa.String(), nullable=True),
        sa.Column("price", sa.Text(), nullable=True),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=False),
        sa.Column("is_closeout", sa.Boolean(), nullable=True),
        sa.Column("min_purchase", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", "version_id", name=op.f("pk_product")),
    )
    op.create_index(
        "ix_product_product_number", "product", ["product_number", "version_id"], unique=False
    )
    op.create_table(
        "product_price",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("version_id", sa.String(length=32), nullable=False),
        sa.Column("product_id", sa.String(length=32), nullable=False),
        sa.Column("rule_id", sa.String(length=32), nullable=False),
        sa.Column("quantity_start", sa.Integer(), nullable=False),
        sa.Column("quantity_end", sa.Integer(), nullable=True),
        sa.Column("price", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["product_id", "version_id"],
            ["product.id", "product.version_id"],
            name=op.f("fk_product_price_product_price_product_id_product"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", "version_id", name=op.f("pk_product_price")),
    )
    op.create_index(
        "ix_product_price_product_id",
        "product_price",
        ["product_id", "version_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_product_price_product_id", table_name="product_price")
    op.drop_table("product_price")
    op.drop_index("ix_product_product_number", table_name="product")
    op.drop_table("product")
    op.drop_table("currency")
