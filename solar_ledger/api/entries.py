"""
Ledger entry endpoints.

The API layer is thin: it loads snapshots through the stores, hands
them to the engines, and maps errors to status codes.
"""

import uuid
from collections.abc import Callable
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from solar_ledger.api.dependencies import (
    committing_saver,
    get_clock,
    validation_error,
)
from solar_ledger.exceptions import EntryNotFoundError
from solar_ledger.models.base import get_db
from solar_ledger.models.enums import EntryKind, EntryStatus
from solar_ledger.schemas.grouping import LedgerViewEntry
from solar_ledger.schemas.ledger import (
    CancelRequest,
    LedgerEntry,
    LedgerEntryCreate,
    LedgerEntryResponse,
)
from solar_ledger.schemas.settlement import SettlementResult
from solar_ledger.services.card_tags import migrate_card_tags, strip_card_tag
from solar_ledger.services.grouping import group_for_list
from solar_ledger.services.ledger_store import CatalogueStore, LedgerStore
from solar_ledger.services.overview import filter_by_due_date
from solar_ledger.services.recurrence import expand_recurrence
from solar_ledger.services.settlement import SettlementCoordinator
from solar_ledger.services.validation import validate_entry_form

router = APIRouter(prefix="/entries", tags=["Entries"])


@router.get("", response_model=list[LedgerViewEntry])
def list_entries(
    kind: EntryKind | None = None,
    start: date | None = None,
    end: date | None = None,
    db: Session = Depends(get_db),
):
    """
    Display list: card expenses grouped into invoices, pending first.
    """
    entries = LedgerStore(db).get_all()
    if kind is not None:
        entries = [e for e in entries if e.kind == kind]
    if start or end:
        entries = filter_by_due_date(entries, start, end)
    return group_for_list(entries, CatalogueStore(db).load())


@router.post("", response_model=list[LedgerEntry], status_code=201)
def create_entry(
    request: LedgerEntryCreate,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """
    Create a manual entry, optionally repeated over future periods.

    Missing category falls back to the first active category of the
    entry's kind.
    """
    catalogue = CatalogueStore(db).load()
    if not request.category_id:
        default = catalogue.default_category(request.kind)
        if default is not None:
            request = request.model_copy(update={"category_id": default.id})

    errors = validate_entry_form(request)
    if errors:
        raise validation_error(errors)

    store = LedgerStore(db)
    entry_id = request.id or uuid.uuid4().hex
    if store.exists(entry_id):
        raise HTTPException(
            status_code=400, detail=f"Entry {entry_id} already exists"
        )

    today = clock()
    base = LedgerEntry(
        id=entry_id,
        description=request.description.strip(),
        amount=request.amount,
        kind=request.kind,
        due_date=request.due_date,
        launch_date=request.launch_date or today,
        payment_date=(
            request.payment_date or today
            if request.status == EntryStatus.SETTLED
            else None
        ),
        category_id=request.category_id,
        bank_account_id=request.bank_account_id,
        status=request.status,
    )

    entries = [base]
    if request.recurrence is not None:
        result = expand_recurrence(
            base,
            request.recurrence.frequency,
            request.recurrence.occurrences,
        )
        if not result.ok:
            raise validation_error(result.errors)
        entries = result.entries

    store.save_many(entries)
    db.commit()
    return entries


@router.post("/migrate-card-tags")
def migrate_tags(db: Session = Depends(get_db)):
    """Backfill card_holder / card_label from description tags."""
    store = LedgerStore(db)
    changed = migrate_card_tags(store.get_all())
    store.save_many(changed)
    db.commit()
    return {"migrated": len(changed)}


@router.get("/{entry_id}", response_model=LedgerEntryResponse)
def get_entry(entry_id: str, db: Session = Depends(get_db)):
    try:
        entry = LedgerStore(db).get(entry_id)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    catalogue = CatalogueStore(db).load()
    return LedgerEntryResponse(
        **entry.model_dump(),
        category_name=catalogue.category_name(entry.category_id),
        plain_description=strip_card_tag(entry.description),
    )


@router.put("/{entry_id}", response_model=LedgerEntry)
def replace_entry(
    entry_id: str,
    entry: LedgerEntry,
    db: Session = Depends(get_db),
):
    """Replace an entry as a whole."""
    if entry.id != entry_id:
        raise HTTPException(
            status_code=400, detail="Entry id does not match the path"
        )
    store = LedgerStore(db)
    try:
        store.get(entry_id)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    store.save(entry)
    db.commit()
    return entry


@router.delete("/{entry_id}", status_code=204)
def delete_entry(entry_id: str, db: Session = Depends(get_db)):
    try:
        LedgerStore(db).delete(entry_id)
        db.commit()
    except EntryNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


def _transition(
    entry_id: str,
    db: Session,
    clock: Callable[[], date],
    action: Callable[[SettlementCoordinator, LedgerEntry], SettlementResult],
) -> SettlementResult:
    store = LedgerStore(db)
    try:
        entry = store.get(entry_id)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    coordinator = SettlementCoordinator(committing_saver(db, store), clock)
    try:
        result = action(coordinator, entry)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    if result.errors:
        raise validation_error(result.errors)
    return result


@router.post("/{entry_id}/settle", response_model=SettlementResult)
def settle_entry(
    entry_id: str,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return _transition(entry_id, db, clock, lambda c, e: c.settle(e))


@router.post("/{entry_id}/reverse", response_model=SettlementResult)
def reverse_entry(
    entry_id: str,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return _transition(entry_id, db, clock, lambda c, e: c.reverse(e))


@router.post("/{entry_id}/cancel", response_model=SettlementResult)
def cancel_entry(
    entry_id: str,
    request: CancelRequest,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    return _transition(
        entry_id, db, clock, lambda c, e: c.cancel(e, request.reason)
    )
