"""
SQLAlchemy-backed stores.

These are the persistence collaborators of the engines: they turn
rows into domain snapshots and save whole entries back. The engines
never see a session.

Like the other services, a store takes the session as a constructor
argument, so the caller controls commit and rollback.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from solar_ledger.exceptions import EntryNotFoundError
from solar_ledger.models.catalogue import CategoryRecord, CreditCardRecord
from solar_ledger.models.enums import EntryStatus
from solar_ledger.models.ledger_entry import LedgerEntryRecord
from solar_ledger.schemas.catalogue import CardConfig, Category
from solar_ledger.schemas.ledger import LedgerEntry
from solar_ledger.services.catalogue import Catalogue

_ENTRY_FIELDS = tuple(LedgerEntry.model_fields)


class LedgerStore:
    """get-all / get / save / save-many / delete over ledger_entries."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self, status: EntryStatus | None = None
    ) -> list[LedgerEntry]:
        """Snapshot of every entry, ordered by due date then id."""
        query = select(LedgerEntryRecord).order_by(
            LedgerEntryRecord.due_date, LedgerEntryRecord.id
        )
        if status is not None:
            query = query.where(LedgerEntryRecord.status == status)
        records = self.db.execute(query).scalars().all()
        return [LedgerEntry.model_validate(r) for r in records]

    def get(self, entry_id: str) -> LedgerEntry:
        record = self.db.get(LedgerEntryRecord, entry_id)
        if record is None:
            raise EntryNotFoundError(entry_id)
        return LedgerEntry.model_validate(record)

    def exists(self, entry_id: str) -> bool:
        return self.db.get(LedgerEntryRecord, entry_id) is not None

    def save(self, entry: LedgerEntry) -> LedgerEntry:
        """Insert or replace one entry as a whole."""
        self._upsert(entry)
        self.db.flush()
        return entry

    def save_many(self, entries: list[LedgerEntry]) -> list[LedgerEntry]:
        """Insert or replace a batch; flushed once at the end."""
        for entry in entries:
            self._upsert(entry)
        self.db.flush()
        return list(entries)

    def delete(self, entry_id: str) -> None:
        record = self.db.get(LedgerEntryRecord, entry_id)
        if record is None:
            raise EntryNotFoundError(entry_id)
        self.db.delete(record)
        self.db.flush()

    def _upsert(self, entry: LedgerEntry) -> LedgerEntryRecord:
        record = self.db.get(LedgerEntryRecord, entry.id)
        if record is None:
            record = LedgerEntryRecord(id=entry.id)
            self.db.add(record)
        for field in _ENTRY_FIELDS:
            if field != "id":
                setattr(record, field, getattr(entry, field))
        return record


class CatalogueStore:
    """Categories and credit cards."""

    def __init__(self, db: Session):
        self.db = db

    def categories(self) -> list[Category]:
        records = self.db.execute(
            select(CategoryRecord).order_by(CategoryRecord.name)
        ).scalars().all()
        return [Category.model_validate(r) for r in records]

    def cards(self) -> list[CardConfig]:
        records = self.db.execute(
            select(CreditCardRecord).order_by(CreditCardRecord.name)
        ).scalars().all()
        return [CardConfig.model_validate(r) for r in records]

    def load(self) -> Catalogue:
        """Read-only catalogue for one request."""
        return Catalogue(categories=self.categories(), cards=self.cards())

    def save_category(self, category: Category) -> Category:
        record = self.db.get(CategoryRecord, category.id)
        if record is None:
            record = CategoryRecord(id=category.id)
            self.db.add(record)
        for field, value in category.model_dump(exclude={"id"}).items():
            setattr(record, field, value)
        self.db.flush()
        return category

    def save_card(self, card: CardConfig) -> CardConfig:
        """
        Insert or update a card.

        Raises ValueError if another card already uses the name.
        """
        clash = self.db.execute(
            select(CreditCardRecord).where(
                CreditCardRecord.name == card.name,
                CreditCardRecord.id != card.id,
            )
        ).scalar_one_or_none()
        if clash:
            raise ValueError(f"Card with name '{card.name}' already exists")

        record = self.db.get(CreditCardRecord, card.id)
        if record is None:
            record = CreditCardRecord(id=card.id)
            self.db.add(record)
        for field, value in card.model_dump(exclude={"id"}).items():
            setattr(record, field, value)
        self.db.flush()
        return card

    def category_in_use(self, category_id: str) -> bool:
        used = self.db.execute(
            select(LedgerEntryRecord.id).where(
                LedgerEntryRecord.category_id == category_id
            ).limit(1)
        ).scalar_one_or_none()
        return used is not None

    def delete_category(self, category_id: str) -> None:
        """
        Delete an unused category.

        Raises ValueError if the category is unknown or still
        referenced by an entry.
        """
        record = self.db.get(CategoryRecord, category_id)
        if record is None:
            raise ValueError(f"Category {category_id} not found")
        if self.category_in_use(category_id):
            raise ValueError(
                f"Category {category_id} is in use; deactivate it instead"
            )
        self.db.delete(record)
        self.db.flush()
