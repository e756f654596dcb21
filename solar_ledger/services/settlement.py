"""
Settlement: paying, reversing and cancelling entries and invoices.

Single entries move through the state machine in VALID_TRANSITIONS:

    pending  -> settled    (settle: payment_date = today)
    settled  -> pending    (reverse: payment_date cleared)
    pending  -> cancelled  (cancel: reason required)
    settled  -> cancelled
    cancelled is terminal

An invoice fans out to its members one at a time, in member order,
through the save callable. This is not a transaction:
when member k fails, members before k stay transitioned, member k is
reported as failed and the rest are reported as skipped, untouched.
The caller reconciles or retries from the SettlementResult.
"""

from collections.abc import Callable
from datetime import date

from solar_ledger.exceptions import InvalidTransitionError
from solar_ledger.logging_config import get_logger
from solar_ledger.models.enums import EntryStatus, VALID_TRANSITIONS
from solar_ledger.schemas.grouping import GroupedInvoice
from solar_ledger.schemas.ledger import LedgerEntry
from solar_ledger.schemas.settlement import SettlementResult
from solar_ledger.services.validation import validate_cancel_reason

logger = get_logger(__name__)

SaveEntry = Callable[[LedgerEntry], object]
Target = LedgerEntry | GroupedInvoice


def can_transition(current: EntryStatus, target: EntryStatus) -> bool:
    return target in VALID_TRANSITIONS.get(current, set())


class SettlementCoordinator:
    """
    Applies status transitions and hands each changed entry to
    ``save_entry``.

    ``clock`` returns today's date; tests pass a fixed one.
    """

    def __init__(
        self,
        save_entry: SaveEntry,
        clock: Callable[[], date] = date.today,
    ):
        self.save_entry = save_entry
        self.clock = clock

    # --- public operations ---

    def settle(self, target: Target) -> SettlementResult:
        today = self.clock()
        return self._apply(
            target,
            EntryStatus.SETTLED,
            {"payment_date": today, "cancel_reason": None},
        )

    def reverse(self, entry: LedgerEntry) -> SettlementResult:
        """Undo a payment. Only single entries can be reversed."""
        if not isinstance(entry, LedgerEntry):
            raise TypeError("only single entries can be reversed")
        return self._apply(
            entry, EntryStatus.PENDING, {"payment_date": None}
        )

    def cancel(self, target: Target, reason: str | None) -> SettlementResult:
        """
        Cancel an entry or every member of an invoice.

        A blank reason is a validation error: nothing is written.
        """
        errors = validate_cancel_reason(reason)
        if errors:
            return SettlementResult(errors=errors)
        return self._apply(
            target,
            EntryStatus.CANCELLED,
            {"cancel_reason": reason.strip()},
        )

    # --- internals ---

    def _apply(
        self,
        target: Target,
        status: EntryStatus,
        fields: dict,
    ) -> SettlementResult:
        if isinstance(target, GroupedInvoice):
            return self._fan_out(target, status, fields)

        updated = self._transition(target, status, fields)
        self.save_entry(updated)
        logger.info(
            "Entry transitioned",
            extra={"entry_id": target.id, "to_status": status.value},
        )
        return SettlementResult(succeeded=[target.id], entries=[updated])

    def _transition(
        self,
        entry: LedgerEntry,
        status: EntryStatus,
        fields: dict,
    ) -> LedgerEntry:
        if not can_transition(entry.status, status):
            raise InvalidTransitionError(entry.id, entry.status, status)
        return entry.model_copy(update={"status": status, **fields})

    def _fan_out(
        self,
        invoice: GroupedInvoice,
        status: EntryStatus,
        fields: dict,
    ) -> SettlementResult:
        result = SettlementResult()
        members = list(invoice.members)

        for position, member in enumerate(members):
            if member.status == status:
                # Already there; nothing to write.
                result.succeeded.append(member.id)
                result.entries.append(member)
                continue
            try:
                updated = self._transition(member, status, fields)
                self.save_entry(updated)
            except Exception as e:
                result.failed[member.id] = str(e)
                result.skipped = [m.id for m in members[position + 1:]]
                break
            result.succeeded.append(member.id)
            result.entries.append(updated)

        if result.failed:
            logger.warning(
                "Invoice transition stopped at a failing member",
                extra={
                    "invoice_id": invoice.id,
                    "to_status": status.value,
                    "succeeded": result.succeeded,
                    "failed": list(result.failed),
                    "skipped": result.skipped,
                },
            )
        else:
            logger.info(
                "Invoice transitioned",
                extra={
                    "invoice_id": invoice.id,
                    "to_status": status.value,
                    "members": len(members),
                },
            )
        return result
