"""add charity updates and amount upper bounds

Revision ID: 8d42e6b1c5a7
Revises: 5f1c2a9e7b30
Create Date: 2026-10-18 15:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8d42e6b1c5a7"
down_revision = "5f1c2a9e7b30"
branch_labels = None
depends_on = None

# 2**53 - 1
MAX_CENTS = 9007199254740991


def upgrade() -> None:
    op.create_table(
        "updates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("guid", sa.String(length=36), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True)),
        sa.Column("last_modified", sa.DateTime(timezone=True)),
        sa.Column("erased", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("charity", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index("ix_updates_guid", "updates", ["guid"], unique=True)
    op.create_index("ix_updates_erased", "updates", ["erased"])
    op.create_index("ix_updates_charity", "updates", ["charity"])
    op.create_index("ix_updates_name", "updates", ["name"])

    with op.batch_alter_table("users") as batch_op:
        batch_op.create_check_constraint("ck_users_balance_max", f"balance <= {MAX_CENTS}")
    with op.batch_alter_table("donations") as batch_op:
        batch_op.create_check_constraint("ck_donations_amount_max", f"amount <= {MAX_CENTS}")


def downgrade() -> None:
    with op.batch_alter_table("donations") as batch_op:
        batch_op.drop_constraint("ck_donations_amount_max", type_="check")
    with op.batch_alter_table("users") as batch_op:
        batch_op.drop_constraint("ck_users_balance_max", type_="check")
    op.drop_table("updates")
