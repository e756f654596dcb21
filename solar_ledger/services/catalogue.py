"""
Read-only view of the category and card catalogues.

The engines receive a Catalogue instead of reloading reference data
themselves, so every aggregation stays a pure function of its inputs.
"""

from solar_ledger.models.enums import EntryKind
from solar_ledger.schemas.catalogue import CardConfig, Category
from solar_ledger.services.card_tags import CardTag

# Shown for an entry whose category no longer exists.
UNKNOWN_CATEGORY_NAME = "N/A"


class Catalogue:
    """Categories and cards, indexed once."""

    def __init__(
        self,
        categories: list[Category] | None = None,
        cards: list[CardConfig] | None = None,
    ):
        self._categories = {c.id: c for c in categories or []}
        self._cards = list(cards or [])

    @property
    def categories(self) -> list[Category]:
        return list(self._categories.values())

    @property
    def cards(self) -> list[CardConfig]:
        return list(self._cards)

    def category(self, category_id: str | None) -> Category | None:
        if category_id is None:
            return None
        return self._categories.get(category_id)

    def category_name(self, category_id: str | None) -> str:
        category = self.category(category_id)
        return category.name if category else UNKNOWN_CATEGORY_NAME

    def default_category(self, kind: EntryKind) -> Category | None:
        """First active category of a kind, alphabetically."""
        candidates = sorted(
            (c for c in self._categories.values()
             if c.kind == kind and c.active),
            key=lambda c: c.name.lower(),
        )
        return candidates[0] if candidates else None

    def card_by_name(self, name: str) -> CardConfig | None:
        wanted = name.strip().lower()
        for card in self._cards:
            if wanted in (card.name.lower(), card.display_label.lower()):
                return card
        return None

    def match_card(self, tag: CardTag | None) -> CardConfig | None:
        """
        Card named by a provenance tag, or None.

        The card label is tried first, then the holder part and the
        full label, since older tags put the card name before the
        parenthesis.
        """
        if tag is None:
            return None
        for candidate in (tag.card_label, tag.holder, tag.full_label):
            card = self.card_by_name(candidate)
            if card is not None:
                return card
        return None
