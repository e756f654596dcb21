"""
Tests for card provenance tags and the catalogue card lookup.
"""

from solar_ledger.models.enums import EntryKind
from solar_ledger.services.card_tags import (
    CardTag,
    build_card_tag,
    card_reference,
    migrate_card_tags,
    parse_card_tag,
    strip_card_tag,
)

from tests.factories import make_card_entry, make_entry


class TestParseCardTag:

    def test_holder_and_card(self):
        tag = parse_card_tag("[Maria (Nubank **** 1234)] Lunch")
        assert tag == CardTag(
            holder="Maria",
            card_label="Nubank **** 1234",
            full_label="Maria (Nubank **** 1234)",
        )

    def test_card_only(self):
        tag = parse_card_tag("[Nubank **** 1234] Lunch")
        assert tag.holder == "Nubank **** 1234"
        assert tag.card_label == "Nubank **** 1234"

    def test_legacy_prefix_is_stripped(self):
        tag = parse_card_tag("[Cartão: Itau] Lunch")
        assert tag.card_label == "Itau"
        assert tag.full_label == "Cartão: Itau"

    def test_no_tag(self):
        assert parse_card_tag("Lunch") is None
        assert parse_card_tag("[] Lunch") is None
        assert parse_card_tag("") is None


class TestBuildAndStrip:

    def test_build_with_holder(self):
        assert build_card_tag("Itau", "  Ana ") == "[Ana (Itau)]"

    def test_build_without_holder(self):
        assert build_card_tag("Itau") == "[Itau]"
        assert build_card_tag("Itau", "  ") == "[Itau]"

    def test_strip(self):
        assert strip_card_tag("[Ana (Itau)] Lunch (1/3)") == "Lunch (1/3)"
        assert strip_card_tag("Lunch") == "Lunch"

    def test_build_then_parse(self):
        tag = parse_card_tag(build_card_tag("Itau", "Ana") + " Lunch")
        assert (tag.holder, tag.card_label) == ("Ana", "Itau")


class TestCardReference:

    def test_structured_fields_win_over_description(self):
        entry = make_entry(
            "cc-b1-1", description="[Maria (Nubank)] Lunch",
            card_label="Itau", card_holder="Ana",
        )
        tag = card_reference(entry)
        assert tag.card_label == "Itau"
        assert tag.full_label == "Ana (Itau)"

    def test_falls_back_to_description(self):
        tag = card_reference(make_card_entry("1"))
        assert tag.holder == "Maria"


class TestMigrateCardTags:

    def test_backfills_fields(self):
        changed = migrate_card_tags([
            make_card_entry("1"),
            make_card_entry("2", description="[Itau] Lunch"),
        ])

        assert [(e.card_holder, e.card_label) for e in changed] == [
            ("Maria", "Nubank **** 1234"),
            (None, "Itau"),
        ]
        assert changed[0].description == "[Maria (Nubank **** 1234)] Fuel"

    def test_skips_entries_that_need_nothing(self):
        already = make_card_entry("1", card_label="Nubank **** 1234")
        manual = make_entry("rent", description="[Landlord] Rent")
        income = make_entry(
            "cc-x", kind=EntryKind.INCOME, description="[Itau] refund"
        )
        untagged = make_card_entry("2", description="Fuel")
        assert migrate_card_tags([already, manual, income, untagged]) == []


class TestCatalogueCards:

    def test_card_by_name_or_label(self, catalogue):
        assert catalogue.card_by_name("NUBANK").id == "card-nu"
        assert catalogue.card_by_name(" Nubank **** 1234 ").id == "card-nu"
        assert catalogue.card_by_name("Amex") is None

    def test_match_card_tries_holder_part(self, catalogue):
        # Older tags put the card name before the parenthesis.
        tag = parse_card_tag("[Itau (Maria)] Lunch")
        assert catalogue.match_card(tag).id == "card-itau"

    def test_match_card_without_tag(self, catalogue):
        assert catalogue.match_card(None) is None

    def test_default_category(self, catalogue):
        assert catalogue.default_category(EntryKind.INCOME).id == "cat-sales"
        assert catalogue.default_category(EntryKind.EXPENSE).id == "cat-supplier"
        assert catalogue.category_name("gone") == "N/A"
