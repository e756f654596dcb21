"""
Ledger entry model.

One row per payable or receivable. Rows are replaced whole by the
store; only status, payment_date and cancel_reason change in place
during settlement.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, Text,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from solar_ledger.models.base import Base
from solar_ledger.models.enums import EntryKind, EntryStatus


class LedgerEntryRecord(Base):
    """
    Persisted form of a LedgerEntry.

    category_id and bank_account_id are plain strings rather than
    foreign keys: the catalogue may be edited independently and a
    dangling reference must still load (it renders as "N/A").
    """

    __tablename__ = "ledger_entries"

    id: Mapped[str] = mapped_column(String(120), primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 2), nullable=False
    )
    kind: Mapped[EntryKind] = mapped_column(
        SAEnum(EntryKind, name="entry_kind_enum"),
        nullable=False,
    )
    status: Mapped[EntryStatus] = mapped_column(
        SAEnum(EntryStatus, name="entry_status_enum"),
        nullable=False,
        default=EntryStatus.PENDING,
        index=True,
    )
    due_date: Mapped[date | None] = mapped_column(
        Date, nullable=True, index=True
    )
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    launch_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    category_id: Mapped[str | None] = mapped_column(
        String(120), nullable=True, index=True
    )
    bank_account_id: Mapped[str | None] = mapped_column(
        String(120), nullable=True
    )
    cancel_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Structured card provenance; older rows only have the
    # bracket tag inside description.
    card_label: Mapped[str | None] = mapped_column(
        String(140), nullable=True
    )
    card_holder: Mapped[str | None] = mapped_column(
        String(120), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<LedgerEntryRecord {self.id} {self.kind.value} "
            f"{self.amount} ({self.status.value})>"
        )
