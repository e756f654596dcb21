"""
Credit card endpoints: card registry and card expense batches.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from solar_ledger.api.dependencies import validation_error
from solar_ledger.models.base import get_db
from solar_ledger.schemas.catalogue import CardConfig, CardCreate
from solar_ledger.schemas.expansion import CardExpenseBatch
from solar_ledger.schemas.ledger import LedgerEntry
from solar_ledger.services.installments import InstallmentExpander
from solar_ledger.services.ledger_store import CatalogueStore, LedgerStore

router = APIRouter(prefix="/cards", tags=["Cards"])


def _to_config(card_id: str, request: CardCreate) -> CardConfig:
    return CardConfig(
        id=card_id,
        name=request.name.strip(),
        last_digits=request.last_digits,
        closing_day=request.closing_day,
        due_day=request.due_day,
        active=request.active,
    )


@router.get("", response_model=list[CardConfig])
def list_cards(db: Session = Depends(get_db)):
    return CatalogueStore(db).cards()


@router.post("", response_model=CardConfig, status_code=201)
def create_card(request: CardCreate, db: Session = Depends(get_db)):
    """Register a card. Only the last four digits of its number are kept."""
    card = _to_config(request.id or f"card-{uuid.uuid4().hex[:12]}", request)
    try:
        CatalogueStore(db).save_card(card)
        db.commit()
        return card
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{card_id}", response_model=CardConfig)
def update_card(
    card_id: str,
    request: CardCreate,
    db: Session = Depends(get_db),
):
    """Edit a card, or block it with active=false."""
    store = CatalogueStore(db)
    if not any(c.id == card_id for c in store.cards()):
        raise HTTPException(status_code=404, detail=f"Card {card_id} not found")
    card = _to_config(card_id, request)
    try:
        store.save_card(card)
        db.commit()
        return card
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/expenses", response_model=list[LedgerEntry], status_code=201)
def post_card_expenses(
    batch: CardExpenseBatch,
    db: Session = Depends(get_db),
):
    """
    Expand and save a card expense batch.

    If any line is invalid nothing is saved and the response lists
    the failing fields per line.
    """
    catalogue = CatalogueStore(db).load()
    result = InstallmentExpander().expand_batch(batch, catalogue)
    if not result.ok:
        raise validation_error(result.errors)

    LedgerStore(db).save_many(result.entries)
    db.commit()
    return result.entries
