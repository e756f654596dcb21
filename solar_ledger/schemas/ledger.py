"""
Pydantic schemas for ledger entries.

LedgerEntry is the domain shape every engine function works on.
It is separate from LedgerEntryRecord because the engines must
run on plain in-memory snapshots, without a database session.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from solar_ledger.models.enums import EntryKind, EntryStatus, Frequency

CENT = Decimal("0.01")

# Ids produced by the card expansion pipeline start with this marker.
CARD_ID_PREFIX = "cc-"

ID_MAX_LENGTH = 120


def to_cents(value: Decimal) -> Decimal:
    """Round a currency amount to cents, half up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class LedgerEntry(BaseModel):
    """
    A single payable or receivable.

    Invariants checked on construction:
    - amount is stored rounded to cents
    - a settled entry always has a payment_date
    - a cancelled entry always has a non-blank cancel_reason
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(min_length=1, max_length=ID_MAX_LENGTH)
    description: str
    amount: Decimal
    kind: EntryKind
    due_date: date | None = None
    payment_date: date | None = None
    launch_date: date | None = None
    category_id: str | None = None
    bank_account_id: str | None = None
    status: EntryStatus = EntryStatus.PENDING
    cancel_reason: str | None = None
    card_label: str | None = None
    card_holder: str | None = None

    @field_validator("amount")
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        return to_cents(v)

    @model_validator(mode="after")
    def check_status_fields(self) -> "LedgerEntry":
        if self.status == EntryStatus.SETTLED and self.payment_date is None:
            raise ValueError("a settled entry must have a payment_date")
        if self.status == EntryStatus.CANCELLED and not (
            self.cancel_reason and self.cancel_reason.strip()
        ):
            raise ValueError("a cancelled entry must have a cancel_reason")
        return self

    @property
    def effective_date(self) -> date | None:
        """The date the entry counts on: payment date, else due date."""
        return self.payment_date or self.due_date

    @property
    def has_card_provenance(self) -> bool:
        """True for expenses that came out of the card pipeline."""
        if self.kind != EntryKind.EXPENSE:
            return False
        return self.id.startswith(CARD_ID_PREFIX) or bool(self.card_label)


# --- Request Schemas ---

class RecurrenceRequest(BaseModel):
    """Repeat a new entry over future periods."""
    frequency: Frequency = Frequency.MONTHLY
    occurrences: int = Field(default=2)


class LedgerEntryCreate(BaseModel):
    """
    A manually entered ledger entry.

    Field rules (description, category, amount, bank) are checked by
    validate_entry_form() so that every failing field is reported at
    once instead of the first one raising.
    """
    id: str | None = Field(default=None, max_length=ID_MAX_LENGTH)
    description: str = ""
    amount: Decimal = Decimal("0")
    kind: EntryKind = EntryKind.EXPENSE
    due_date: date
    launch_date: date | None = None
    payment_date: date | None = None
    category_id: str | None = None
    bank_account_id: str | None = None
    status: EntryStatus = EntryStatus.PENDING
    recurrence: RecurrenceRequest | None = None


class CancelRequest(BaseModel):
    reason: str = ""


# --- Response Schemas ---

class LedgerEntryResponse(LedgerEntry):
    """Single entry in API responses."""
    category_name: str | None = None
    # description without the card bracket tag
    plain_description: str | None = None
