"""Add inventory and popularity columns to books.

Revision ID: 002
Revises: 001
Create Date: 2026-10-05 09:30:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add stock counters, supplier data and view count to books."""
    with op.batch_alter_table("books") as batch_op:
        batch_op.add_column(
            sa.Column("quantity_in_stock", sa.Integer(), server_default="0", nullable=False)
        )
        batch_op.add_column(
            sa.Column("reserved_quantity", sa.Integer(), server_default="0", nullable=False)
        )
        batch_op.add_column(
            sa.Column("cost_price", sa.Numeric(precision=12, scale=2), nullable=True)
        )
        batch_op.add_column(sa.Column("supplier_info", sa.String(length=500), nullable=True))
        batch_op.add_column(
            sa.Column("reorder_level", sa.Integer(), server_default="5", nullable=False)
        )
        batch_op.add_column(
            sa.Column("view_count", sa.BigInteger(), server_default="0", nullable=False)
        )

    # Restock and low-stock reports filter on these
    op.create_index(
        "ix_books_stock_levels", "books", ["quantity_in_stock", "reserved_quantity"]
    )
    op.create_index("ix_books_view_count", "books", ["view_count"])


def downgrade() -> None:
    """Remove inventory columns from books."""
    op.drop_index("ix_books_view_count", table_name="books")
    op.drop_index("ix_books_stock_levels", table_name="books")
    with op.batch_alter_table("books") as batch_op:
        batch_op.drop_column("view_count")
        batch_op.drop_column("reorder_level")
        batch_op.drop_column("supplier_info")
        batch_op.drop_column("cost_price")
        batch_op.drop_column("reserved_quantity")
        batch_op.drop_column("quantity_in_stock")
