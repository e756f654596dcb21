"""
Schemas for turning user input into batches of ledger entries.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from solar_ledger.models.enums import BillingMode
from solar_ledger.schemas.ledger import LedgerEntry


class ExpenseLine(BaseModel):
    """
    One line of a card expense form.

    Nothing here is rejected by Pydantic beyond types: description,
    category and amount are checked together by the expander so the
    form can highlight every failing field on every line.
    """
    date: datetime.date
    description: str = ""
    category_id: str | None = None
    billing_mode: BillingMode = BillingMode.SINGLE
    count: int = 1
    amount: Decimal = Decimal("0")


class CardExpenseBatch(BaseModel):
    """All lines typed in one go for a single card."""
    card_name: str
    holder: str | None = Field(default=None, max_length=120)
    batch_id: str | None = Field(default=None, max_length=60)
    lines: list[ExpenseLine] = Field(min_length=1)


class ExpansionResult(BaseModel):
    """
    Entries ready for bulk persistence, or the reasons there are none.

    errors maps a line index (or "batch") to {field: message}. When
    errors is non-empty, entries is always empty.
    """
    entries: list[LedgerEntry] = Field(default_factory=list)
    errors: dict[str, dict[str, str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def total(self) -> Decimal:
        return sum((e.amount for e in self.entries), Decimal("0.00"))
