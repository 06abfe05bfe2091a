"""Marketplace schema baseline

Revision ID: 20261018_01
Revises: None
Create Date: 2026-10-18
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_AMOUNT = sa.Numeric(18, 2)


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "users",
        sa.Column("user_id", sa.Text(), primary_key=True),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'INVESTOR'")),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint("role in ('INVESTOR', 'BUSINESS_OWNER', 'ADMINISTRATOR')", name="ck_users_role"),
    )
    op.create_index("ix_users_created_at_utc", "users", ["created_at_utc"])

    op.create_table(
        "businesses",
        sa.Column("business_id", sa.Text(), primary_key=True),
        sa.Column("owner_user_id", sa.Text(), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("industry", sa.Text(), nullable=True),
        sa.Column("risk_level", sa.Text(), nullable=True),
        sa.Column("target_capital", _AMOUNT, nullable=False),
        sa.Column("minimum_investment", _AMOUNT, nullable=False, server_default=sa.text("0")),
        sa.Column("expected_roi", sa.Numeric(9, 4), nullable=True),
        sa.Column("timeline_months", sa.Integer(), nullable=True),
        sa.Column("current_raised", _AMOUNT, nullable=False, server_default=sa.text("0")),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'OPEN'")),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_businesses_owner_created", "businesses", ["owner_user_id", "created_at_utc"])

    op.create_table(
        "investments",
        sa.Column("investment_id", sa.Text(), primary_key=True),
        sa.Column("investor_user_id", sa.Text(), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column("business_id", sa.Text(), sa.ForeignKey("businesses.business_id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", _AMOUNT, nullable=False),
        sa.Column("current_value", _AMOUNT, nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'PENDING'")),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint("amount >= 0", name="ck_investments_amount_non_negative"),
    )
    op.create_index("ix_investments_investor_created", "investments", ["investor_user_id", "created_at_utc"])
    op.create_index("ix_investments_business_created", "investments", ["business_id", "created_at_utc"])

    op.create_table(
        "investment_returns",
        sa.Column("return_id", sa.Text(), primary_key=True),
        sa.Column(
            "investment_id",
            sa.Text(),
            sa.ForeignKey("investments.investment_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", _AMOUNT, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_investment_returns_investment", "investment_returns", ["investment_id", "created_at_utc"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_investment_returns_investment", table_name="investment_returns")
    op.drop_table("investment_returns")
    op.drop_index("ix_investments_business_created", table_name="investments")
    op.drop_index("ix_investments_investor_created", table_name="investments")
    op.drop_table("investments")
    op.drop_index("ix_businesses_owner_created", table_name="businesses")
    op.drop_table("businesses")
    op.drop_index("ix_users_created_at_utc", table_name="users")
    op.drop_table("users")
