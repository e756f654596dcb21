"""
Income statement (DRE) output shapes.

Rows are dense: every label that appears in any column appears in
all of them, zero-filled where it had no entries.
"""

from decimal import Decimal

from pydantic import BaseModel, computed_field

from solar_ledger.models.enums import PeriodType


class PeriodFigures(BaseModel):
    """Derived metrics of one column (or of the Total column)."""
    gross_revenue: Decimal
    taxes: Decimal
    net_revenue: Decimal
    cost_of_goods: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    net_profit: Decimal
    margin: Decimal


class StatementRow(BaseModel):
    label: str
    values: list[Decimal]
    total: Decimal


# Subtotal rows in display order: (label, PeriodFigures attribute)
SUBTOTAL_ROWS = (
    ("Gross revenue", "gross_revenue"),
    ("Taxes on revenue", "taxes"),
    ("Net revenue", "net_revenue"),
    ("Cost of goods", "cost_of_goods"),
    ("Gross profit", "gross_profit"),
    ("Operating expenses", "operating_expenses"),
    ("Net profit", "net_profit"),
    ("Margin %", "margin"),
)


class IncomeStatement(BaseModel):
    period_type: PeriodType
    year: int | None = None
    columns: list[str]
    revenue_rows: list[StatementRow]
    tax_rows: list[StatementRow]
    cost_rows: list[StatementRow]
    expense_rows: list[StatementRow]
    periods: list[PeriodFigures]
    total: PeriodFigures

    @computed_field
    @property
    def subtotal_rows(self) -> list[StatementRow]:
        return [
            StatementRow(
                label=label,
                values=[getattr(p, field) for p in self.periods],
                total=getattr(self.total, field),
            )
            for label, field in SUBTOTAL_ROWS
        ]

    def row_labels(self) -> set[str]:
        """Every detail row label across the four blocks."""
        rows = (
            self.revenue_rows + self.tax_rows
            + self.cost_rows + self.expense_rows
        )
        return {r.label for r in rows}
