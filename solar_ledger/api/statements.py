"""
Income statement (DRE) endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from solar_ledger.models.base import get_db
from solar_ledger.models.enums import EntryStatus, PeriodType
from solar_ledger.schemas.statement import IncomeStatement
from solar_ledger.services.ledger_store import CatalogueStore, LedgerStore
from solar_ledger.services.statement import build_income_statement

router = APIRouter(prefix="/statements", tags=["Statements"])


@router.get("/income", response_model=IncomeStatement)
def income_statement(
    period_type: PeriodType = PeriodType.MONTHLY,
    year: int | None = None,
    group_card_expenses: bool = False,
    group_by_managerial_group: bool = False,
    settled_only: bool = True,
    db: Session = Depends(get_db),
):
    """
    Income statement of one year (or of every entry when year is
    omitted). Only settled entries count unless settled_only=false.
    """
    status = EntryStatus.SETTLED if settled_only else None
    entries = LedgerStore(db).get_all(status=status)
    if not settled_only:
        entries = [e for e in entries if e.status != EntryStatus.CANCELLED]
    return build_income_statement(
        entries,
        CatalogueStore(db).load(),
        period_type=period_type,
        group_card_expenses=group_card_expenses,
        group_by_managerial_group=group_by_managerial_group,
        year=year,
    )
