"""
Financial category endpoints.
"""

import re
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from solar_ledger.models.base import get_db
from solar_ledger.schemas.catalogue import Category, CategoryCreate
from solar_ledger.services.ledger_store import CatalogueStore

router = APIRouter(prefix="/categories", tags=["Categories"])


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


@router.get("", response_model=list[Category])
def list_categories(db: Session = Depends(get_db)):
    return CatalogueStore(db).categories()


@router.post("", response_model=Category, status_code=201)
def create_category(request: CategoryCreate, db: Session = Depends(get_db)):
    category = Category(
        id=request.id or f"{_slug(request.name)}-{uuid.uuid4().hex[:8]}",
        **request.model_dump(exclude={"id"}),
    )
    CatalogueStore(db).save_category(category)
    db.commit()
    return category


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: str, db: Session = Depends(get_db)):
    """Delete a category; refused while any entry still uses it."""
    try:
        CatalogueStore(db).delete_category(category_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)
