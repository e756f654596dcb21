"""
Builders for ledger entries and a small reference catalogue.
"""

from datetime import date
from decimal import Decimal

from solar_ledger.models.enums import EntryKind, EntryStatus
from solar_ledger.schemas.catalogue import CardConfig, Category
from solar_ledger.schemas.ledger import LedgerEntry
from solar_ledger.services.ledger_store import CatalogueStore


def make_entry(
    entry_id="e-1",
    amount="100.00",
    kind=EntryKind.EXPENSE,
    status=EntryStatus.PENDING,
    due_date=date(2024, 4, 10),
    payment_date=None,
    category_id="cat-office",
    description="Office supplies",
    **extra,
) -> LedgerEntry:
    if status == EntryStatus.SETTLED and payment_date is None:
        payment_date = due_date
    if status == EntryStatus.CANCELLED:
        extra.setdefault("cancel_reason", "duplicate")
    return LedgerEntry(
        id=entry_id,
        description=description,
        amount=Decimal(amount),
        kind=kind,
        status=status,
        due_date=due_date,
        payment_date=payment_date,
        category_id=category_id,
        **extra,
    )


def make_card_entry(
    entry_id,
    amount="50.00",
    due_date=date(2024, 4, 10),
    holder="Maria",
    card="Nubank **** 1234",
    **kwargs,
) -> LedgerEntry:
    """A card-pipeline expense described only by its bracket tag."""
    kwargs.setdefault("description", f"[{holder} ({card})] Fuel")
    return make_entry(
        entry_id=f"cc-b1-{entry_id}",
        amount=amount,
        due_date=due_date,
        **kwargs,
    )


CATEGORIES = [
    Category(id="cat-sales", name="Panel sales", kind=EntryKind.INCOME,
             managerial_group="Revenue"),
    Category(id="cat-wash", name="Panel washing", kind=EntryKind.INCOME,
             managerial_group="Revenue"),
    Category(id="cat-tax", name="Imposto Simples", kind=EntryKind.EXPENSE),
    Category(id="cat-supplier", name="Fornecedor de painéis",
             kind=EntryKind.EXPENSE),
    Category(id="cat-office", name="Office supplies", kind=EntryKind.EXPENSE,
             managerial_group="Admin"),
    Category(id="cat-fuel", name="Fuel", kind=EntryKind.EXPENSE,
             managerial_group="Field"),
    Category(id="cat-transfer", name="Transfer", kind=EntryKind.RESULT),
]

CARDS = [
    CardConfig(id="card-nu", name="Nubank", last_digits="1234",
               closing_day=15, due_day=10),
    CardConfig(id="card-itau", name="Itau", closing_day=5, due_day=20),
    CardConfig(id="card-old", name="Old card", closing_day=1, due_day=10,
               active=False),
]


def seed_catalogue(db):
    """Store CATEGORIES and CARDS and commit."""
    store = CatalogueStore(db)
    for category in CATEGORIES:
        store.save_category(category)
    for card in CARDS:
        store.save_card(card)
    db.commit()
