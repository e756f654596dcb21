"""
Card provenance tags.

Card expenses used to carry their card only inside the description,
as a bracket tag at the front: ``[Maria (Nubank **** 1234)] Lunch``.
The text before the parenthesis is the card holder; the parenthesis
holds the card label; the whole bracket is the full card label shown
on invoice detail views. A tag without a parenthesis names the card
alone, and then holder and card label are the same text.

New entries also store card_holder and card_label as fields.
card_reference() prefers those fields and falls back to parsing the
tag, and migrate_card_tags() backfills the fields for old entries.
"""

import re
from dataclasses import dataclass

from solar_ledger.logging_config import get_logger
from solar_ledger.schemas.ledger import LedgerEntry

logger = get_logger(__name__)

_TAG_RE = re.compile(r"\[(.*?)\]\s?")
_HOLDER_RE = re.compile(r"^(?P<holder>[^(]*?)\s*\((?P<card>[^)]*)\)\s*$")

# Older tags were written as "[Cartão: <card>]".
_LEGACY_PREFIXES = ("cartão:", "cartao:", "card:")


@dataclass(frozen=True)
class CardTag:
    holder: str
    card_label: str
    full_label: str


def _strip_legacy_prefix(text: str) -> str:
    lowered = text.lower()
    for prefix in _LEGACY_PREFIXES:
        if lowered.startswith(prefix):
            return text[len(prefix):].strip()
    return text.strip()


def parse_card_tag(description: str) -> CardTag | None:
    """Read the first bracket tag of a description, if any."""
    match = _TAG_RE.search(description or "")
    if not match:
        return None
    full = match.group(1).strip()
    if not full:
        return None
    inner = _HOLDER_RE.match(full)
    if inner:
        holder = _strip_legacy_prefix(inner.group("holder"))
        card = inner.group("card").strip()
        return CardTag(
            holder=holder or card,
            card_label=card or holder,
            full_label=full,
        )
    name = _strip_legacy_prefix(full)
    return CardTag(holder=name, card_label=name, full_label=full)


def build_card_tag(card_label: str, holder: str | None = None) -> str:
    """Bracket tag for a new card expense description."""
    if holder and holder.strip():
        return f"[{holder.strip()} ({card_label})]"
    return f"[{card_label}]"


def strip_card_tag(description: str) -> str:
    """Description without its bracket tag."""
    return _TAG_RE.sub("", description or "", count=1).strip()


def card_reference(entry: LedgerEntry) -> CardTag | None:
    """Card of an entry: structured fields first, then the tag."""
    if entry.card_label:
        holder = entry.card_holder or entry.card_label
        full = (
            f"{entry.card_holder} ({entry.card_label})"
            if entry.card_holder
            else entry.card_label
        )
        return CardTag(
            holder=holder, card_label=entry.card_label, full_label=full
        )
    return parse_card_tag(entry.description)


def migrate_card_tags(entries: list[LedgerEntry]) -> list[LedgerEntry]:
    """
    Copy bracket-tag contents into card_holder / card_label.

    Returns only the entries that changed, ready to be saved.
    Descriptions are left untouched.
    """
    changed = []
    for entry in entries:
        if entry.card_label or not entry.has_card_provenance:
            continue
        tag = parse_card_tag(entry.description)
        if tag is None:
            continue
        holder = tag.holder if tag.holder != tag.card_label else None
        changed.append(entry.model_copy(update={
            "card_label": tag.card_label,
            "card_holder": holder,
        }))

    logger.info(
        "Card tags migrated",
        extra={"scanned": len(entries), "migrated": len(changed)},
    )
    return changed
