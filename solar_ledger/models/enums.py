"""
Shared enumerations.

The same enums are used by the database models and the Pydantic
schemas, so a status or kind that cannot be stored cannot be
represented in the domain either.
"""

import enum


class EntryKind(str, enum.Enum):
    """What a ledger entry (or a category) represents."""
    INCOME = "income"
    EXPENSE = "expense"
    RESULT = "result"


class EntryStatus(str, enum.Enum):
    """Lifecycle of a ledger entry."""
    PENDING = "pending"
    SETTLED = "settled"
    CANCELLED = "cancelled"


# Valid status transitions. Cancelled is terminal.
VALID_TRANSITIONS: dict[EntryStatus, set[EntryStatus]] = {
    EntryStatus.PENDING: {EntryStatus.SETTLED, EntryStatus.CANCELLED},
    EntryStatus.SETTLED: {EntryStatus.PENDING, EntryStatus.CANCELLED},
    EntryStatus.CANCELLED: set(),
}


class BillingMode(str, enum.Enum):
    """How a single card expense line turns into ledger entries."""
    SINGLE = "single"
    INSTALLMENT = "installment"
    FIXED_RECURRING = "fixed_recurring"


class Frequency(str, enum.Enum):
    """Recurrence step for non-card obligations."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"

    @property
    def months(self) -> int:
        return _FREQUENCY_MONTHS[self]


_FREQUENCY_MONTHS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.SEMIANNUAL: 6,
    Frequency.ANNUAL: 12,
}


class PeriodType(str, enum.Enum):
    """Column granularity of the income statement."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"


class MonthOverflowPolicy(str, enum.Enum):
    """What to do when a day does not exist in the target month."""
    CLAMP = "clamp"
    ROLL_OVER = "roll_over"
