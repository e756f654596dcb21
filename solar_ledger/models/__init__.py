"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from solar_ledger.models.base import Base
from solar_ledger.models.enums import (
    EntryKind,
    EntryStatus,
    BillingMode,
    Frequency,
    PeriodType,
    MonthOverflowPolicy,
)
from solar_ledger.models.ledger_entry import LedgerEntryRecord
from solar_ledger.models.catalogue import CategoryRecord, CreditCardRecord

__all__ = [
    "Base",
    "EntryKind",
    "EntryStatus",
    "BillingMode",
    "Frequency",
    "PeriodType",
    "MonthOverflowPolicy",
    "LedgerEntryRecord",
    "CategoryRecord",
    "CreditCardRecord",
]
