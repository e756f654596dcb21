"""
View shapes produced by the grouping engine.

A display list mixes plain entries and card invoices. Each item is a
tagged variant with a "view" discriminant, so consumers switch on it
instead of probing for optional fields.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, computed_field

from solar_ledger.models.enums import EntryStatus
from solar_ledger.schemas.ledger import LedgerEntry


class GroupedInvoice(BaseModel):
    """
    All card expenses sharing one billing cycle.

    Never persisted. members keeps the original entries, in input
    order, for drill-down and for settlement fan-out.
    """
    id: str
    due_date: date | None
    closing_day: int
    card_labels: list[str] = Field(default_factory=list)
    members: list[LedgerEntry]

    @computed_field
    @property
    def amount(self) -> Decimal:
        return sum((m.amount for m in self.members), Decimal("0.00"))

    @computed_field
    @property
    def status(self) -> EntryStatus:
        if self.members and all(
            m.status == EntryStatus.SETTLED for m in self.members
        ):
            return EntryStatus.SETTLED
        return EntryStatus.PENDING

    @property
    def payment_date(self) -> date | None:
        """Latest member payment once the whole invoice is settled."""
        if self.status != EntryStatus.SETTLED:
            return None
        return max(m.payment_date for m in self.members)

    @property
    def effective_date(self) -> date | None:
        return self.payment_date or self.due_date


class SingleEntryView(BaseModel):
    view: Literal["single"] = "single"
    entry: LedgerEntry

    @property
    def status(self) -> EntryStatus:
        return self.entry.status

    @property
    def due_date(self) -> date | None:
        return self.entry.due_date

    @property
    def effective_date(self) -> date | None:
        return self.entry.effective_date


class InvoiceView(BaseModel):
    view: Literal["invoice"] = "invoice"
    invoice: GroupedInvoice

    @property
    def status(self) -> EntryStatus:
        return self.invoice.status

    @property
    def due_date(self) -> date | None:
        return self.invoice.due_date

    @property
    def effective_date(self) -> date | None:
        return self.invoice.effective_date


LedgerViewEntry = Annotated[
    Union[SingleEntryView, InvoiceView],
    Field(discriminator="view"),
]


class CardGroup(BaseModel):
    """Entries of one card label inside an invoice."""
    label: str
    entries: list[LedgerEntry]

    @computed_field
    @property
    def total(self) -> Decimal:
        return sum((e.amount for e in self.entries), Decimal("0.00"))


class HolderGroup(BaseModel):
    """Entries of one card holder inside an invoice, by card."""
    holder: str
    cards: list[CardGroup]

    @computed_field
    @property
    def total(self) -> Decimal:
        return sum((c.total for c in self.cards), Decimal("0.00"))


class InvoiceDetail(BaseModel):
    invoice: GroupedInvoice
    holders: list[HolderGroup]
