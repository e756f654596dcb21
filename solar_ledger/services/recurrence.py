"""
Recurring obligations outside the card pipeline (rent, insurance,
retainers). A new entry is repeated every 1, 3, 6 or 12 months.

Every occurrence is dated from the base due date (base + i x step),
never from the previous occurrence, so a clamped February does not
drag the rest of the series to day 29.
"""

import uuid

from solar_ledger.logging_config import get_logger
from solar_ledger.models.enums import EntryStatus, Frequency, MonthOverflowPolicy
from solar_ledger.schemas.expansion import ExpansionResult
from solar_ledger.schemas.ledger import ID_MAX_LENGTH, LedgerEntry
from solar_ledger.services.billing_cycle import add_months
from solar_ledger.services.installments import series_suffix

logger = get_logger(__name__)

MIN_OCCURRENCES = 2

# "-" plus 8 hex digits
_ID_SUFFIX_LENGTH = 9


def _new_id(base_id: str) -> str:
    """Base id plus a random suffix, cut so the result fits an entry id."""
    stem = base_id[:ID_MAX_LENGTH - _ID_SUFFIX_LENGTH]
    return f"{stem}-{uuid.uuid4().hex[:8]}"


def expand_recurrence(
    base: LedgerEntry,
    frequency: Frequency,
    occurrences: int,
    policy: MonthOverflowPolicy | None = None,
) -> ExpansionResult:
    """
    Repeat ``base`` ``occurrences`` times.

    Occurrence 0 keeps the base id, status and payment date. The
    others get fresh ids and start pending with no payment date.
    All of them get the " (i/n)" description suffix.
    """
    errors: dict[str, str] = {}
    if occurrences < MIN_OCCURRENCES:
        errors["occurrences"] = f"must be at least {MIN_OCCURRENCES}"
    if base.due_date is None:
        errors["due_date"] = "required"
    if errors:
        return ExpansionResult(errors={"0": errors})

    step = frequency.months
    entries = []
    for i in range(occurrences):
        update = {
            "description": f"{base.description}{series_suffix(i, occurrences)}",
            "due_date": add_months(base.due_date, i * step, policy),
        }
        if i > 0:
            update.update({
                "id": _new_id(base.id),
                "status": EntryStatus.PENDING,
                "payment_date": None,
                "cancel_reason": None,
            })
        entries.append(
            LedgerEntry.model_validate({**base.model_dump(), **update})
        )

    logger.info(
        "Recurrence expanded",
        extra={
            "base_id": base.id,
            "frequency": frequency.value,
            "occurrences": occurrences,
        },
    )
    return ExpansionResult(entries=entries)
