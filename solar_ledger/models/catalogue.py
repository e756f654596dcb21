"""
Catalogue models: financial categories and credit cards.

Both are reference data. Once used by an entry they are
deactivated rather than deleted.
"""

from datetime import datetime

from sqlalchemy import (
    String, Boolean, DateTime, Integer, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from solar_ledger.models.base import Base
from solar_ledger.models.enums import EntryKind


class CategoryRecord(Base):
    __tablename__ = "financial_categories"

    id: Mapped[str] = mapped_column(String(120), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    kind: Mapped[EntryKind] = mapped_column(
        SAEnum(EntryKind, name="category_kind_enum"),
        nullable=False,
    )
    classification: Mapped[str] = mapped_column(
        String(120), nullable=False, default=""
    )
    managerial_group: Mapped[str | None] = mapped_column(
        String(120), nullable=True
    )
    show_in_statement: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<CategoryRecord {self.name} ({self.kind.value})>"


class CreditCardRecord(Base):
    """
    A company credit card and its billing cycle.

    closing_day and due_day are days of month (1..31).
    """

    __tablename__ = "credit_cards"
    __table_args__ = (
        CheckConstraint(
            "closing_day BETWEEN 1 AND 31", name="ck_card_closing_day"
        ),
        CheckConstraint("due_day BETWEEN 1 AND 31", name="ck_card_due_day"),
    )

    id: Mapped[str] = mapped_column(String(120), primary_key=True)
    name: Mapped[str] = mapped_column(
        String(120), unique=True, nullable=False
    )
    last_digits: Mapped[str | None] = mapped_column(
        String(4), nullable=True
    )
    closing_day: Mapped[int] = mapped_column(Integer, nullable=False)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<CreditCardRecord {self.name} "
            f"closes={self.closing_day} due={self.due_day}>"
        )
