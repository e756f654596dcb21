"""
Dashboard overview endpoint.
"""

from collections.abc import Callable
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from solar_ledger.api.dependencies import get_clock
from solar_ledger.models.base import get_db
from solar_ledger.schemas.overview import (
    CashFlowResponse,
    DueStatus,
    OverviewResponse,
)
from solar_ledger.services.ledger_store import LedgerStore
from solar_ledger.services.overview import (
    cash_flow,
    classify_due,
    filter_by_due_date,
    summarize,
    upcoming_due,
)

router = APIRouter(prefix="/overview", tags=["Overview"])


@router.get("", response_model=OverviewResponse)
def overview(
    start: date | None = None,
    end: date | None = None,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Totals and due alerts for entries due between start and end."""
    today = clock()
    entries = LedgerStore(db).get_all()
    if start or end:
        entries = filter_by_due_date(entries, start, end)

    statuses = [classify_due(e, today).status for e in entries]
    return OverviewResponse(
        summary=summarize(entries),
        overdue_count=statuses.count(DueStatus.OVERDUE),
        due_soon_count=(
            statuses.count(DueStatus.DUE_TODAY)
            + statuses.count(DueStatus.DUE_SOON)
        ),
        upcoming=upcoming_due(entries, today),
    )


@router.get("/cash-flow", response_model=CashFlowResponse)
def monthly_cash_flow(
    year: int | None = None,
    clock: Callable[[], date] = Depends(get_clock),
    db: Session = Depends(get_db),
):
    """Realized income, expenses and result per month of a year."""
    year = year or clock().year
    return CashFlowResponse(
        year=year,
        months=cash_flow(LedgerStore(db).get_all(), year),
    )
