"""
Shared FastAPI dependencies.

Tests override get_clock to pin "today".
"""

from collections.abc import Callable
from datetime import date

from fastapi import HTTPException
from sqlalchemy.orm import Session

from solar_ledger.services.ledger_store import LedgerStore


def get_clock() -> Callable[[], date]:
    return date.today


def committing_saver(db: Session, store: LedgerStore):
    """
    Save callable that commits each entry on its own.

    Group settlement relies on this: a later member failing must not
    roll back members already written.
    """
    def save(entry):
        try:
            store.save(entry)
            db.commit()
        except Exception:
            db.rollback()
            raise
    return save


def validation_error(errors: dict) -> HTTPException:
    """422 carrying a field-level error map."""
    return HTTPException(status_code=422, detail={"errors": errors})
