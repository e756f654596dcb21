"""
Form validation.

Every function here returns a {field: message} map, empty when the
input is valid. Nothing raises: the caller needs to highlight every
failing field of every line at once.
"""

from decimal import Decimal

from solar_ledger.models.enums import BillingMode, EntryStatus
from solar_ledger.schemas.expansion import ExpenseLine
from solar_ledger.schemas.ledger import LedgerEntryCreate

REQUIRED = "required"


def validate_expense_line(line: ExpenseLine) -> dict[str, str]:
    """Check one card expense line."""
    errors: dict[str, str] = {}
    if not line.description or not line.description.strip():
        errors["description"] = REQUIRED
    if not line.category_id:
        errors["category_id"] = REQUIRED
    if line.amount is None or line.amount <= Decimal("0"):
        errors["amount"] = "must be greater than zero"
    if line.billing_mode != BillingMode.SINGLE and line.count < 1:
        errors["count"] = "must be at least 1"
    return errors


def validate_entry_form(form: LedgerEntryCreate) -> dict[str, str]:
    """Check a manually entered ledger entry."""
    errors: dict[str, str] = {}
    if not form.description or not form.description.strip():
        errors["description"] = REQUIRED
    if not form.category_id:
        errors["category_id"] = REQUIRED
    if form.amount is None or form.amount <= Decimal("0"):
        errors["amount"] = "must be greater than zero"
    if form.status == EntryStatus.SETTLED and not form.bank_account_id:
        errors["bank_account_id"] = "required for a settled entry"
    if form.status == EntryStatus.CANCELLED:
        errors["status"] = "use the cancel action to cancel an entry"
    if form.recurrence is not None and form.recurrence.occurrences < 2:
        errors["occurrences"] = "must be at least 2"
    return errors


def validate_cancel_reason(reason: str | None) -> dict[str, str]:
    if not reason or not reason.strip():
        return {"cancel_reason": REQUIRED}
    return {}
