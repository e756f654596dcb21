"""
Invoice grouping.

List level: card expenses that share a billing cycle, i.e. the same
(due date, card closing day), collapse into one GroupedInvoice.
Everything else passes through as a single entry. A card expense whose
card is not in the catalogue still groups, with closing day 0, so it
is never dropped from the list.

Detail level: the members of one invoice nest holder -> full card
label -> entries. A member whose card cannot be read (the tag was
edited out of the description) lands in an explicit "unlinked"
bucket.

ungroup() is the exact inverse of group_for_list(): it returns the
same entries, none lost, none duplicated.
"""

from collections import OrderedDict
from datetime import date

from solar_ledger.logging_config import get_logger
from solar_ledger.models.enums import EntryStatus
from solar_ledger.schemas.grouping import (
    CardGroup,
    GroupedInvoice,
    HolderGroup,
    InvoiceView,
    LedgerViewEntry,
    SingleEntryView,
)
from solar_ledger.schemas.ledger import LedgerEntry
from solar_ledger.services.card_tags import card_reference
from solar_ledger.services.catalogue import Catalogue

logger = get_logger(__name__)

UNLINKED_HOLDER = "manual/unlinked"
UNLINKED_LABEL = "description changed (no card link)"


def invoice_id(due_date: date | None, closing_day: int) -> str:
    due = due_date.isoformat() if due_date else "undated"
    return f"invoice-{due}-{closing_day}"


def _groupable(entry: LedgerEntry) -> bool:
    return (
        entry.has_card_provenance
        and entry.status != EntryStatus.CANCELLED
    )


def _sort_key(item: SingleEntryView | InvoiceView):
    """
    Pending first, oldest due date first.
    Settled and cancelled after, most recent first.
    """
    if item.status == EntryStatus.PENDING:
        due = item.due_date or date.max
        return (0, due.toordinal())
    effective = item.effective_date or date.min
    return (1, -effective.toordinal())


def group_for_list(
    entries: list[LedgerEntry],
    catalogue: Catalogue,
) -> list[LedgerViewEntry]:
    """Build the display list: invoices plus single entries, sorted."""
    buckets: OrderedDict[tuple[date | None, int], list[LedgerEntry]] = (
        OrderedDict()
    )
    labels: dict[tuple[date | None, int], list[str]] = {}
    items: list[SingleEntryView | InvoiceView] = []
    unmatched = 0

    for entry in entries:
        if not _groupable(entry):
            items.append(SingleEntryView(entry=entry))
            continue

        tag = card_reference(entry)
        card = catalogue.match_card(tag)
        if card is None:
            unmatched += 1
        closing_day = card.closing_day if card else 0
        key = (entry.due_date, closing_day)
        buckets.setdefault(key, []).append(entry)

        label = card.display_label if card else (
            tag.card_label if tag else None
        )
        if label and label not in labels.setdefault(key, []):
            labels[key].append(label)

    for (due_date, closing_day), members in buckets.items():
        items.append(InvoiceView(invoice=GroupedInvoice(
            id=invoice_id(due_date, closing_day),
            due_date=due_date,
            closing_day=closing_day,
            card_labels=labels.get((due_date, closing_day), []),
            members=members,
        )))

    if unmatched:
        logger.warning(
            "Card expenses without a matching card grouped by due date only",
            extra={"unmatched": unmatched},
        )

    items.sort(key=_sort_key)
    return items


def find_invoice(
    items: list[LedgerViewEntry], wanted_id: str
) -> GroupedInvoice | None:
    for item in items:
        if isinstance(item, InvoiceView) and item.invoice.id == wanted_id:
            return item.invoice
    return None


def ungroup(items: list[LedgerViewEntry]) -> list[LedgerEntry]:
    """Flatten a display list back into its ledger entries."""
    entries: list[LedgerEntry] = []
    for item in items:
        if isinstance(item, InvoiceView):
            entries.extend(item.invoice.members)
        else:
            entries.append(item.entry)
    return entries


def group_invoice_detail(invoice: GroupedInvoice) -> list[HolderGroup]:
    """
    Nest an invoice's members by holder, then by full card label.

    Holders and labels keep first-seen order; the unlinked bucket, if
    any, comes last.
    """
    tree: OrderedDict[str, OrderedDict[str, list[LedgerEntry]]] = (
        OrderedDict()
    )
    unlinked: list[LedgerEntry] = []

    for member in invoice.members:
        tag = card_reference(member)
        if tag is None:
            unlinked.append(member)
            continue
        cards = tree.setdefault(tag.holder, OrderedDict())
        cards.setdefault(tag.full_label, []).append(member)

    if unlinked:
        bucket = tree.setdefault(UNLINKED_HOLDER, OrderedDict())
        bucket.setdefault(UNLINKED_LABEL, []).extend(unlinked)

    return [
        HolderGroup(
            holder=holder,
            cards=[
                CardGroup(label=label, entries=members)
                for label, members in cards.items()
            ],
        )
        for holder, cards in tree.items()
    ]
