"""
Schemas for the ledger overview (dashboard cards and due alerts).
"""

import enum
from decimal import Decimal

from pydantic import BaseModel

from solar_ledger.schemas.ledger import LedgerEntry


class DueStatus(str, enum.Enum):
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    ON_TIME = "on_time"
    SETTLED = "settled"


class DueInfo(BaseModel):
    status: DueStatus
    # Negative when overdue; None for settled or undated entries.
    days_until_due: int | None = None


class LedgerSummary(BaseModel):
    receivable_pending: Decimal
    payable_pending: Decimal
    balance: Decimal
    period_income: Decimal
    period_expenses: Decimal
    period_result: Decimal


class OverviewResponse(BaseModel):
    summary: LedgerSummary
    overdue_count: int
    due_soon_count: int
    upcoming: list[LedgerEntry]


class MonthFlow(BaseModel):
    """Realized income and expenses of one calendar month."""
    month: int
    label: str
    income: Decimal
    expense: Decimal
    result: Decimal


class CashFlowResponse(BaseModel):
    year: int
    months: list[MonthFlow]
