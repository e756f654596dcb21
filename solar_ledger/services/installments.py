"""
Card expense expansion.

One line typed on the card expense form becomes one or more ledger
entries:

- single: one entry with the full amount, due on the invoice that
  carries the expense date
- installment: ``count`` entries, each ceil(amount / count) to the
  cent, on ``count`` consecutive invoices
- fixed_recurring: ``count`` entries with the full amount each, on
  ``count`` consecutive invoices

Installment amounts are rounded up per entry and never corrected, so
the series may add up to slightly more than the amount typed (at most
count x 0.01). 100.00 in 3 installments is 3 x 33.34 = 100.02.

The expander validates and builds entries. It does not persist them.
"""

import uuid
from decimal import Decimal, ROUND_CEILING

from solar_ledger.logging_config import get_logger
from solar_ledger.models.enums import (
    BillingMode,
    EntryKind,
    EntryStatus,
    MonthOverflowPolicy,
)
from solar_ledger.schemas.catalogue import CardConfig
from solar_ledger.schemas.expansion import (
    CardExpenseBatch,
    ExpansionResult,
    ExpenseLine,
)
from solar_ledger.schemas.ledger import CARD_ID_PREFIX, CENT, LedgerEntry
from solar_ledger.services.billing_cycle import add_months, compute_due_date
from solar_ledger.services.card_tags import build_card_tag
from solar_ledger.services.catalogue import Catalogue
from solar_ledger.services.validation import validate_expense_line

logger = get_logger(__name__)


def installment_amount(total: Decimal, count: int) -> Decimal:
    """Amount of one installment, rounded up to the cent."""
    return (Decimal(total) / count).quantize(CENT, rounding=ROUND_CEILING)


def series_suffix(index: int, count: int) -> str:
    """Suffix like " (2/5)"; empty for a series of one."""
    if count <= 1:
        return ""
    return f" ({index + 1}/{count})"


class InstallmentExpander:
    """
    Builds card expense entries.

    The overflow policy decides what happens when the card's due day
    does not exist in a given month.
    """

    def __init__(self, policy: MonthOverflowPolicy | None = None):
        self.policy = policy

    def expand_line(
        self,
        line: ExpenseLine,
        card: CardConfig,
        entry_id_prefix: str,
        holder: str | None = None,
    ) -> ExpansionResult:
        """
        Expand one line against a card.

        Entry ids are ``<entry_id_prefix>-<n>`` with n starting at 1.
        """
        errors = validate_expense_line(line)
        if errors:
            return ExpansionResult(errors={"0": errors})
        return ExpansionResult(
            entries=self._build_entries(line, card, entry_id_prefix, holder)
        )

    def expand_batch(
        self,
        batch: CardExpenseBatch,
        catalogue: Catalogue,
    ) -> ExpansionResult:
        """
        Expand every line of a card batch.

        The batch is all-or-nothing: if any line is invalid, or the card
        is unknown or inactive, no entry is produced and the error map
        says which fields failed on which line.
        """
        errors: dict[str, dict[str, str]] = {}

        card = catalogue.card_by_name(batch.card_name)
        if card is None:
            errors["batch"] = {"card_name": "unknown card"}
        elif not card.active:
            errors["batch"] = {"card_name": "card is inactive"}

        for index, line in enumerate(batch.lines):
            line_errors = validate_expense_line(line)
            if line_errors:
                errors[str(index)] = line_errors

        if errors:
            logger.warning(
                "Card batch rejected",
                extra={
                    "card_name": batch.card_name,
                    "lines": len(batch.lines),
                    "invalid_lines": sorted(k for k in errors if k != "batch"),
                },
            )
            return ExpansionResult(errors=errors)

        batch_id = batch.batch_id or uuid.uuid4().hex[:12]
        entries: list[LedgerEntry] = []
        for index, line in enumerate(batch.lines):
            prefix = f"{CARD_ID_PREFIX}{batch_id}-{index + 1}"
            entries.extend(
                self._build_entries(line, card, prefix, batch.holder)
            )

        result = ExpansionResult(entries=entries)
        logger.info(
            "Card batch expanded",
            extra={
                "card_name": card.name,
                "batch_id": batch_id,
                "lines": len(batch.lines),
                "entries": len(entries),
                "total": result.total,
            },
        )
        return result

    def _build_entries(
        self,
        line: ExpenseLine,
        card: CardConfig,
        entry_id_prefix: str,
        holder: str | None,
    ) -> list[LedgerEntry]:
        if line.billing_mode == BillingMode.SINGLE:
            count = 1
            amount = line.amount
        elif line.billing_mode == BillingMode.INSTALLMENT:
            count = line.count
            amount = installment_amount(line.amount, count)
        else:
            count = line.count
            amount = line.amount

        base_due = compute_due_date(
            line.date, card.closing_day, card.due_day, self.policy
        )
        tag = build_card_tag(card.display_label, holder)
        holder = holder.strip() if holder and holder.strip() else None

        entries = []
        for i in range(count):
            entries.append(LedgerEntry(
                id=f"{entry_id_prefix}-{i + 1}",
                description=(
                    f"{tag} {line.description.strip()}"
                    f"{series_suffix(i, count)}"
                ),
                amount=amount,
                kind=EntryKind.EXPENSE,
                due_date=add_months(
                    base_due, i, self.policy, day=card.due_day
                ),
                launch_date=line.date,
                category_id=line.category_id,
                status=EntryStatus.PENDING,
                card_label=card.display_label,
                card_holder=holder,
            ))
        return entries
