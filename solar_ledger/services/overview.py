"""
Ledger overview: the figures on the dashboard and the due-date alerts
on the payables/receivables tables.

Cancelled entries never count towards any figure here.
"""

from datetime import date
from decimal import Decimal

from solar_ledger.config import get_settings
from solar_ledger.models.enums import EntryKind, EntryStatus, PeriodType
from solar_ledger.schemas.ledger import LedgerEntry
from solar_ledger.schemas.overview import (
    DueInfo,
    DueStatus,
    LedgerSummary,
    MonthFlow,
)
from solar_ledger.services.statement import PERIOD_COLUMNS

ZERO = Decimal("0.00")


def _total(entries, kind: EntryKind, status: EntryStatus) -> Decimal:
    return sum(
        (e.amount for e in entries if e.kind == kind and e.status == status),
        ZERO,
    )


def summarize(entries: list[LedgerEntry]) -> LedgerSummary:
    """Pending and realized totals of a (usually date-filtered) snapshot."""
    period_income = _total(entries, EntryKind.INCOME, EntryStatus.SETTLED)
    period_expenses = _total(entries, EntryKind.EXPENSE, EntryStatus.SETTLED)
    return LedgerSummary(
        receivable_pending=_total(
            entries, EntryKind.INCOME, EntryStatus.PENDING
        ),
        payable_pending=_total(
            entries, EntryKind.EXPENSE, EntryStatus.PENDING
        ),
        balance=period_income - period_expenses,
        period_income=period_income,
        period_expenses=period_expenses,
        period_result=period_income - period_expenses,
    )


def classify_due(
    entry: LedgerEntry,
    today: date,
    soon_days: int | None = None,
) -> DueInfo:
    """How urgent a pending entry is."""
    if entry.status != EntryStatus.PENDING:
        return DueInfo(status=DueStatus.SETTLED)
    if entry.due_date is None:
        return DueInfo(status=DueStatus.ON_TIME)

    if soon_days is None:
        soon_days = get_settings().DUE_SOON_DAYS
    days = (entry.due_date - today).days
    if days < 0:
        status = DueStatus.OVERDUE
    elif days == 0:
        status = DueStatus.DUE_TODAY
    elif days <= soon_days:
        status = DueStatus.DUE_SOON
    else:
        status = DueStatus.ON_TIME
    return DueInfo(status=status, days_until_due=days)


def upcoming_due(
    entries: list[LedgerEntry],
    today: date,
    limit: int = 5,
) -> list[LedgerEntry]:
    """Next pending entries due today or later, soonest first."""
    pending = [
        e for e in entries
        if e.status == EntryStatus.PENDING
        and e.due_date is not None
        and e.due_date >= today
    ]
    pending.sort(key=lambda e: e.due_date)
    return pending[:limit]


def filter_by_due_date(
    entries: list[LedgerEntry],
    start: date | None = None,
    end: date | None = None,
) -> list[LedgerEntry]:
    """Entries due within [start, end]; undated entries are dropped."""
    selected = []
    for entry in entries:
        if entry.due_date is None:
            continue
        if start and entry.due_date < start:
            continue
        if end and entry.due_date > end:
            continue
        selected.append(entry)
    return selected


def cash_flow(entries: list[LedgerEntry], year: int) -> list[MonthFlow]:
    """
    Twelve months of realized cash for one year.

    Only settled entries count, on their payment date (due date when
    the payment date is missing). Result entries are transfers and
    are left out.
    """
    income = [ZERO] * 12
    expense = [ZERO] * 12
    for entry in entries:
        if entry.status != EntryStatus.SETTLED:
            continue
        reference = entry.effective_date
        if reference is None or reference.year != year:
            continue
        if entry.kind == EntryKind.INCOME:
            income[reference.month - 1] += entry.amount
        elif entry.kind == EntryKind.EXPENSE:
            expense[reference.month - 1] += entry.amount

    labels = PERIOD_COLUMNS[PeriodType.MONTHLY]
    return [
        MonthFlow(
            month=i + 1,
            label=labels[i],
            income=income[i],
            expense=expense[i],
            result=income[i] - expense[i],
        )
        for i in range(12)
    ]
