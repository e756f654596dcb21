"""
Card invoice endpoints.

Invoices are not stored: each request regroups the current snapshot
and looks the invoice up by its synthetic id.
"""

from collections.abc import Callable
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from solar_ledger.api.dependencies import (
    committing_saver,
    get_clock,
    validation_error,
)
from solar_ledger.models.base import get_db
from solar_ledger.schemas.grouping import GroupedInvoice, InvoiceDetail
from solar_ledger.schemas.ledger import CancelRequest
from solar_ledger.schemas.settlement import SettlementResult
from solar_ledger.services.grouping import (
    find_invoice,
    group_for_list,
    group_invoice_detail,
)
from solar_ledger.services.ledger_store import CatalogueStore, LedgerStore
from solar_ledger.services.settlement import SettlementCoordinator

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _load_invoice(invoice_id: str, db: Session) -> GroupedInvoice:
    items = group_for_list(
        LedgerStore(db).get_all(), CatalogueStore(db).load()
    )
    invoice = find_invoice(items, invoice_id)
    if invoice is None:
        raise HTTPException(
            status_code=404, detail=f"Invoice {invoice_id} not found"
        )
    return invoice


@router.get("/{invoice_id}", response_model=InvoiceDetail)
def get_invoice(invoice_id: str, db: Session = Depends(get_db)):
    """Invoice with its members nested by holder and card."""
    invoice = _load_invoice(invoice_id, db)
    return InvoiceDetail(
        invoice=invoice, holders=group_invoice_detail(invoice)
    )


@router.post("/{invoice_id}/settle", response_model=SettlementResult)
def settle_invoice(
    invoice_id: str,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """
    Pay every member, one at a time.

    Not atomic: check ``failed`` and ``skipped`` in the response.
    """
    invoice = _load_invoice(invoice_id, db)
    store = LedgerStore(db)
    coordinator = SettlementCoordinator(committing_saver(db, store), clock)
    return coordinator.settle(invoice)


@router.post("/{invoice_id}/cancel", response_model=SettlementResult)
def cancel_invoice(
    invoice_id: str,
    request: CancelRequest,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    invoice = _load_invoice(invoice_id, db)
    store = LedgerStore(db)
    coordinator = SettlementCoordinator(committing_saver(db, store), clock)
    result = coordinator.cancel(invoice, request.reason)
    if result.errors:
        raise validation_error(result.errors)
    return result
