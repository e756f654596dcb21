"""
Tests for the ledger overview figures and due alerts.
"""

from datetime import date
from decimal import Decimal

import pytest

from solar_ledger.models.enums import EntryKind, EntryStatus
from solar_ledger.schemas.overview import DueStatus
from solar_ledger.services.overview import (
    cash_flow,
    classify_due,
    filter_by_due_date,
    summarize,
    upcoming_due,
)

from tests.factories import make_entry

TODAY = date(2024, 6, 15)


class TestSummarize:

    def test_pending_and_settled_totals(self):
        summary = summarize([
            make_entry("r1", "500.00", kind=EntryKind.INCOME),
            make_entry("r2", "700.00", kind=EntryKind.INCOME,
                       status=EntryStatus.SETTLED),
            make_entry("p1", "120.00"),
            make_entry("p2", "200.00", status=EntryStatus.SETTLED),
            make_entry("x1", "999.00", status=EntryStatus.CANCELLED),
        ])

        assert summary.receivable_pending == Decimal("500.00")
        assert summary.payable_pending == Decimal("120.00")
        assert summary.period_income == Decimal("700.00")
        assert summary.period_expenses == Decimal("200.00")
        assert summary.period_result == Decimal("500.00")

    def test_empty(self):
        summary = summarize([])
        assert summary.balance == Decimal("0")


class TestClassifyDue:

    @pytest.mark.parametrize("due, status, days", [
        (date(2024, 6, 14), DueStatus.OVERDUE, -1),
        (date(2024, 6, 15), DueStatus.DUE_TODAY, 0),
        (date(2024, 6, 18), DueStatus.DUE_SOON, 3),
        (date(2024, 6, 19), DueStatus.ON_TIME, 4),
    ])
    def test_pending(self, due, status, days):
        info = classify_due(make_entry(due_date=due), TODAY, soon_days=3)
        assert info.status == status
        assert info.days_until_due == days

    def test_settled_is_never_overdue(self):
        entry = make_entry(status=EntryStatus.SETTLED, due_date=date(2024, 1, 1))
        assert classify_due(entry, TODAY).status == DueStatus.SETTLED

    def test_undated_pending(self):
        info = classify_due(make_entry(due_date=None), TODAY)
        assert info.status == DueStatus.ON_TIME
        assert info.days_until_due is None


class TestUpcomingAndFilter:

    def test_upcoming_soonest_first(self):
        entries = [
            make_entry("late", due_date=date(2024, 7, 1)),
            make_entry("past", due_date=date(2024, 6, 1)),
            make_entry("soon", due_date=date(2024, 6, 16)),
            make_entry("paid", due_date=date(2024, 6, 17),
                       status=EntryStatus.SETTLED),
        ]
        assert [e.id for e in upcoming_due(entries, TODAY)] == ["soon", "late"]
        assert len(upcoming_due(entries, TODAY, limit=1)) == 1

    def test_filter_is_inclusive(self):
        entries = [
            make_entry("a", due_date=date(2024, 6, 1)),
            make_entry("b", due_date=date(2024, 6, 30)),
            make_entry("c", due_date=date(2024, 7, 1)),
            make_entry("d", due_date=None),
        ]
        selected = filter_by_due_date(
            entries, date(2024, 6, 1), date(2024, 6, 30)
        )
        assert [e.id for e in selected] == ["a", "b"]
        assert [e.id for e in filter_by_due_date(entries, start=date(2024, 6, 2))] == ["b", "c"]


class TestCashFlow:

    def test_twelve_months_even_when_empty(self):
        months = cash_flow([], 2024)

        assert [m.month for m in months] == list(range(1, 13))
        assert months[0].label == "Jan"
        assert all(m.result == Decimal("0") for m in months)

    def test_bucketed_by_payment_date_else_due_date(self):
        months = cash_flow([
            make_entry("late", "150.00", status=EntryStatus.SETTLED,
                       due_date=date(2024, 2, 28),
                       payment_date=date(2024, 3, 2)),
            make_entry("sale", "400.00", kind=EntryKind.INCOME,
                       status=EntryStatus.SETTLED,
                       due_date=date(2024, 2, 10)),
        ], 2024)

        assert months[1].income == Decimal("400.00")
        assert months[1].expense == Decimal("0")
        assert months[2].expense == Decimal("150.00")

    def test_only_settled_entries_count(self):
        months = cash_flow([
            make_entry("open", "80.00", due_date=date(2024, 5, 1)),
            make_entry("void", "90.00", status=EntryStatus.CANCELLED,
                       due_date=date(2024, 5, 1)),
            make_entry("paid", "70.00", status=EntryStatus.SETTLED,
                       due_date=date(2024, 5, 1)),
        ], 2024)

        assert months[4].expense == Decimal("70.00")

    def test_other_years_and_result_entries_are_left_out(self):
        months = cash_flow([
            make_entry("old", "500.00", status=EntryStatus.SETTLED,
                       due_date=date(2023, 5, 1)),
            make_entry("move", "300.00", kind=EntryKind.RESULT,
                       status=EntryStatus.SETTLED,
                       due_date=date(2024, 5, 1),
                       category_id="cat-transfer"),
        ], 2024)

        assert all(m.income == m.expense == Decimal("0") for m in months)

    def test_result_is_income_minus_expense(self):
        months = cash_flow([
            make_entry("sale", "1000.00", kind=EntryKind.INCOME,
                       status=EntryStatus.SETTLED,
                       due_date=date(2024, 7, 3)),
            make_entry("rent", "1500.00", status=EntryStatus.SETTLED,
                       due_date=date(2024, 7, 5)),
        ], 2024)

        july = months[6]
        assert july.result == Decimal("-500.00")
        for m in months:
            assert m.result == m.income - m.expense
