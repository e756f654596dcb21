"""ledger entries, categories and credit cards

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

entry_kind = sa.Enum("INCOME", "EXPENSE", "RESULT", name="entry_kind_enum")
category_kind = sa.Enum(
    "INCOME", "EXPENSE", "RESULT", name="category_kind_enum"
)
entry_status = sa.Enum(
    "PENDING", "SETTLED", "CANCELLED", name="entry_status_enum"
)


def upgrade() -> None:
    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.String(120), primary_key=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("kind", entry_kind, nullable=False),
        sa.Column("status", entry_status, nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("payment_date", sa.Date(), nullable=True),
        sa.Column("launch_date", sa.Date(), nullable=True),
        sa.Column("category_id", sa.String(120), nullable=True),
        sa.Column("bank_account_id", sa.String(120), nullable=True),
        sa.Column("cancel_reason", sa.Text(), nullable=True),
        sa.Column("card_label", sa.String(140), nullable=True),
        sa.Column("card_holder", sa.String(120), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_ledger_entries_status", "ledger_entries", ["status"]
    )
    op.create_index(
        "ix_ledger_entries_due_date", "ledger_entries", ["due_date"]
    )
    op.create_index(
        "ix_ledger_entries_category_id", "ledger_entries", ["category_id"]
    )

    op.create_table(
        "financial_categories",
        sa.Column("id", sa.String(120), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("kind", category_kind, nullable=False),
        sa.Column("classification", sa.String(120), nullable=False),
        sa.Column("managerial_group", sa.String(120), nullable=True),
        sa.Column("show_in_statement", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "credit_cards",
        sa.Column("id", sa.String(120), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False, unique=True),
        sa.Column("last_digits", sa.String(4), nullable=True),
        sa.Column("closing_day", sa.Integer(), nullable=False),
        sa.Column("due_day", sa.Integer(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "closing_day BETWEEN 1 AND 31", name="ck_card_closing_day"
        ),
        sa.CheckConstraint("due_day BETWEEN 1 AND 31", name="ck_card_due_day"),
    )


def downgrade() -> None:
    op.drop_table("credit_cards")
    op.drop_table("financial_categories")
    op.drop_index("ix_ledger_entries_category_id", "ledger_entries")
    op.drop_index("ix_ledger_entries_due_date", "ledger_entries")
    op.drop_index("ix_ledger_entries_status", "ledger_entries")
    op.drop_table("ledger_entries")
    entry_status.drop(op.get_bind(), checkfirst=True)
    category_kind.drop(op.get_bind(), checkfirst=True)
    entry_kind.drop(op.get_bind(), checkfirst=True)
