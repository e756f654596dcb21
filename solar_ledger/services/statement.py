"""
Income statement (DRE) engine.

Entries are bucketed by the month of their payment date (due date when
unpaid) into 12, 4, 2 or 1 columns, and into one of four blocks:

1. with card grouping on, any card expense  -> "Credit card" row,
   operating expenses
2. category kind income                     -> revenue
3. category name contains "imposto"          -> taxes on revenue
4. category name contains "fornecedor"       -> cost of goods
5. category kind expense                     -> operating expenses

The first rule that matches wins. Entries matching none are left out.
The engine trusts its input: filtering to settled entries is up to
the caller.

Per column:
    net_revenue  = gross_revenue - taxes
    gross_profit = net_revenue - cost_of_goods
    net_profit   = gross_profit - operating_expenses
    margin       = net_profit / gross_revenue x 100 (0 without revenue)

The Total column sums the four raw figures across columns first and
derives the rest from those sums. Margins are never averaged.
"""

from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP

from solar_ledger.logging_config import get_logger
from solar_ledger.models.enums import EntryKind, PeriodType
from solar_ledger.schemas.ledger import CENT, LedgerEntry
from solar_ledger.schemas.statement import (
    IncomeStatement,
    PeriodFigures,
    StatementRow,
)
from solar_ledger.services.catalogue import Catalogue

logger = get_logger(__name__)

ZERO = Decimal("0.00")
CARD_ROW_LABEL = "Credit card"

REVENUE = "revenue"
TAXES = "taxes"
COSTS = "costs"
EXPENSES = "expenses"
BLOCKS = (REVENUE, TAXES, COSTS, EXPENSES)

TAX_KEYWORD = "imposto"
COST_KEYWORD = "fornecedor"

_MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

PERIOD_COLUMNS: dict[PeriodType, tuple[str, ...]] = {
    PeriodType.MONTHLY: _MONTH_LABELS,
    PeriodType.QUARTERLY: ("Q1", "Q2", "Q3", "Q4"),
    PeriodType.SEMIANNUAL: ("H1", "H2"),
    PeriodType.ANNUAL: ("Year",),
}


def column_index(month: int, period_type: PeriodType) -> int:
    """Column of a calendar month (1..12)."""
    months_per_column = 12 // len(PERIOD_COLUMNS[period_type])
    return (month - 1) // months_per_column


def classify(
    entry: LedgerEntry,
    catalogue: Catalogue,
    group_card_expenses: bool = False,
    group_by_managerial_group: bool = False,
) -> tuple[str, str] | None:
    """Return (block, row label) for an entry, or None to leave it out."""
    if group_card_expenses and entry.has_card_provenance:
        return EXPENSES, CARD_ROW_LABEL

    category = catalogue.category(entry.category_id)
    if category is None:
        return None

    label = category.name
    if group_by_managerial_group and category.managerial_group:
        label = category.managerial_group

    name = category.name.lower()
    if category.kind == EntryKind.INCOME:
        return REVENUE, label
    if TAX_KEYWORD in name:
        return TAXES, label
    if COST_KEYWORD in name:
        return COSTS, label
    if category.kind == EntryKind.EXPENSE:
        return EXPENSES, label
    return None


def compute_figures(
    gross_revenue: Decimal,
    taxes: Decimal,
    cost_of_goods: Decimal,
    operating_expenses: Decimal,
) -> PeriodFigures:
    net_revenue = gross_revenue - taxes
    gross_profit = net_revenue - cost_of_goods
    net_profit = gross_profit - operating_expenses
    if gross_revenue == 0:
        margin = ZERO
    else:
        margin = (net_profit / gross_revenue * 100).quantize(
            CENT, rounding=ROUND_HALF_UP
        )
    return PeriodFigures(
        gross_revenue=gross_revenue,
        taxes=taxes,
        net_revenue=net_revenue,
        cost_of_goods=cost_of_goods,
        gross_profit=gross_profit,
        operating_expenses=operating_expenses,
        net_profit=net_profit,
        margin=margin,
    )


def _dense_rows(columns: list[dict[str, Decimal]]) -> list[StatementRow]:
    """Union of labels across columns, sorted, zero-filled."""
    labels = set()
    for column in columns:
        labels.update(column)
    rows = []
    for label in sorted(labels, key=lambda s: (s.casefold(), s)):
        values = [column.get(label, ZERO) for column in columns]
        rows.append(StatementRow(
            label=label, values=values, total=sum(values, ZERO)
        ))
    return rows


def build_income_statement(
    entries: list[LedgerEntry],
    catalogue: Catalogue,
    period_type: PeriodType = PeriodType.MONTHLY,
    group_card_expenses: bool = False,
    group_by_managerial_group: bool = False,
    year: int | None = None,
) -> IncomeStatement:
    """Compute the DRE matrix for a snapshot of entries."""
    labels = PERIOD_COLUMNS[period_type]
    matrix: dict[str, list[dict[str, Decimal]]] = {
        block: [defaultdict(lambda: ZERO) for _ in labels]
        for block in BLOCKS
    }
    undated = excluded = 0

    for entry in entries:
        reference = entry.effective_date
        if reference is None:
            undated += 1
            continue
        if year is not None and reference.year != year:
            continue

        row = classify(
            entry, catalogue, group_card_expenses, group_by_managerial_group
        )
        if row is None:
            excluded += 1
            continue

        block, label = row
        index = column_index(reference.month, period_type)
        matrix[block][index][label] += entry.amount

    raw = {
        block: [sum(column.values(), ZERO) for column in matrix[block]]
        for block in BLOCKS
    }
    periods = [
        compute_figures(
            raw[REVENUE][i], raw[TAXES][i], raw[COSTS][i], raw[EXPENSES][i]
        )
        for i in range(len(labels))
    ]
    total = compute_figures(*(sum(raw[block], ZERO) for block in BLOCKS))

    logger.info(
        "Income statement built",
        extra={
            "period_type": period_type.value,
            "year": year,
            "entries_in": len(entries),
            "undated": undated,
            "excluded": excluded,
        },
    )

    return IncomeStatement(
        period_type=period_type,
        year=year,
        columns=list(labels),
        revenue_rows=_dense_rows(matrix[REVENUE]),
        tax_rows=_dense_rows(matrix[TAXES]),
        cost_rows=_dense_rows(matrix[COSTS]),
        expense_rows=_dense_rows(matrix[EXPENSES]),
        periods=periods,
        total=total,
    )
