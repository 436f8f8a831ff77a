"""create ledger entity tables

Revision ID: 5f1c2a9e7b30
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5f1c2a9e7b30"
down_revision = None
branch_labels = None
depends_on = None


def _object_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("guid", sa.String(length=36), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True)),
        sa.Column("last_modified", sa.DateTime(timezone=True)),
        sa.Column("erased", sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _object_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_guid", table, ["guid"], unique=True)
    op.create_index(f"ix_{table}_erased", table, ["erased"])


def upgrade() -> None:
    op.create_table(
        "users",
        *_object_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        sa.Column("charity", sa.String(length=36)),
        sa.Column("balance", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )
    _object_indexes("users")
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_charity", "users", ["charity"])

    op.create_table(
        "charities",
        *_object_columns(),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
    )
    _object_indexes("charities")
    op.create_index("ix_charities_name", "charities", ["name"])

    op.create_table(
        "campaigns",
        *_object_columns(),
        sa.Column("charity", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
    )
    _object_indexes("campaigns")
    op.create_index("ix_campaigns_charity", "campaigns", ["charity"])
    op.create_index("ix_campaigns_name", "campaigns", ["name"])

    op.create_table(
        "posts",
        *_object_columns(),
        sa.Column("user", sa.String(length=36), nullable=False),
        sa.Column("campaign", sa.String(length=36), nullable=False),
        sa.Column("charity", sa.String(length=36), nullable=False),
        sa.Column("caption", sa.Text(), nullable=False, server_default=""),
    )
    _object_indexes("posts")
    op.create_index("ix_posts_user", "posts", ["user"])
    op.create_index("ix_posts_campaign", "posts", ["campaign"])
    op.create_index("ix_posts_charity", "posts", ["charity"])

    op.create_table(
        "donations",
        *_object_columns(),
        sa.Column("user", sa.String(length=36), nullable=False),
        sa.Column("charity", sa.String(length=36), nullable=False),
        sa.Column("campaign", sa.String(length=36)),
        sa.Column("post", sa.String(length=36)),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
    )
    _object_indexes("donations")
    op.create_index("ix_donations_user", "donations", ["user"])
    op.create_index("ix_donations_charity", "donations", ["charity"])
    op.create_index("ix_donations_campaign", "donations", ["campaign"])
    op.create_index("ix_donations_post", "donations", ["post"])

    op.create_table(
        "entity_references",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("entity_type", sa.String(length=20), nullable=False),
        sa.Column("entity_guid", sa.String(length=36), nullable=False),
        sa.Column("field", sa.String(length=50), nullable=False),
        sa.Column("ref_guid", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_entity_references_owner", "entity_references", ["entity_type", "entity_guid", "field"])
    op.create_index("ix_entity_references_ref_guid", "entity_references", ["ref_guid"])


def downgrade() -> None:
    op.drop_table("entity_references")
    op.drop_table("donations")
    op.drop_table("posts")
    op.drop_table("campaigns")
    op.drop_table("charities")
    op.drop_table("users")
