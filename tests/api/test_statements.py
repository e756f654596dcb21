"""
Tests for the income statement, overview and category endpoints.
"""

from datetime import date
from decimal import Decimal

import pytest

from solar_ledger.models.enums import EntryKind, EntryStatus
from solar_ledger.services.ledger_store import LedgerStore

from tests.factories import make_card_entry, make_entry, seed_catalogue


@pytest.fixture
def stored_entries(db_session):
    seed_catalogue(db_session)
    LedgerStore(db_session).save_many([
        make_entry("sale", "1000.00", kind=EntryKind.INCOME,
                   status=EntryStatus.SETTLED, due_date=date(2024, 1, 5),
                   category_id="cat-sales"),
        make_entry("tax", "100.00", status=EntryStatus.SETTLED,
                   due_date=date(2024, 1, 20), category_id="cat-tax"),
        make_entry("office", "200.00", status=EntryStatus.SETTLED,
                   due_date=date(2024, 4, 2)),
        make_card_entry("1", status=EntryStatus.SETTLED,
                        due_date=date(2024, 4, 10), category_id="cat-fuel"),
        make_entry("open", "300.00", due_date=date(2024, 6, 14)),
        make_entry("void", "400.00", status=EntryStatus.CANCELLED,
                   due_date=date(2024, 6, 16)),
        make_entry("next", "80.00", due_date=date(2024, 6, 17)),
    ])
    db_session.commit()


class TestIncomeStatement:

    def test_monthly_statement(self, client, stored_entries):
        response = client.get("/statements/income", params={"year": 2024})

        assert response.status_code == 200
        data = response.json()
        assert len(data["columns"]) == 12
        total = data["total"]
        assert Decimal(total["gross_revenue"]) == Decimal("1000")
        assert Decimal(total["taxes"]) == Decimal("100")
        assert Decimal(total["operating_expenses"]) == Decimal("250")
        assert Decimal(total["net_profit"]) == Decimal("650")
        assert Decimal(total["margin"]) == Decimal("65")

    def test_pending_excluded_by_default(self, client, stored_entries):
        data = client.get("/statements/income").json()
        labels = [r["label"] for r in data["expense_rows"]]
        assert labels == ["Fuel", "Office supplies"]
        assert Decimal(data["total"]["operating_expenses"]) == Decimal("250")

    def test_include_pending_but_never_cancelled(self, client, stored_entries):
        data = client.get(
            "/statements/income", params={"settled_only": False}
        ).json()
        assert Decimal(data["total"]["operating_expenses"]) == Decimal("630")

    def test_quarterly_with_card_row(self, client, stored_entries):
        data = client.get("/statements/income", params={
            "period_type": "quarterly",
            "group_card_expenses": True,
        }).json()

        assert data["columns"] == ["Q1", "Q2", "Q3", "Q4"]
        rows = {r["label"]: r for r in data["expense_rows"]}
        assert set(rows) == {"Credit card", "Office supplies"}
        assert Decimal(rows["Credit card"]["values"][1]) == Decimal("50")

    def test_subtotal_rows_included(self, client, stored_entries):
        data = client.get("/statements/income").json()
        labels = [r["label"] for r in data["subtotal_rows"]]
        assert labels[0] == "Gross revenue"
        assert labels[-1] == "Margin %"

    def test_bad_period_type_returns_422(self, client):
        response = client.get(
            "/statements/income", params={"period_type": "weekly"}
        )
        assert response.status_code == 422


class TestOverview:

    def test_due_alerts(self, client, stored_entries):
        data = client.get("/overview").json()

        assert data["overdue_count"] == 1
        assert data["due_soon_count"] == 1
        assert [e["id"] for e in data["upcoming"]] == ["next"]
        assert Decimal(data["summary"]["payable_pending"]) == Decimal("380")
        assert Decimal(data["summary"]["period_income"]) == Decimal("1000")

    def test_date_filter(self, client, stored_entries):
        data = client.get("/overview", params={
            "start": "2024-06-01", "end": "2024-06-30",
        }).json()
        assert Decimal(data["summary"]["period_income"]) == Decimal("0")
        assert Decimal(data["summary"]["payable_pending"]) == Decimal("380")


    def test_cash_flow(self, client, stored_entries):
        data = client.get("/overview/cash-flow").json()

        assert data["year"] == 2024
        assert len(data["months"]) == 12
        january, april = data["months"][0], data["months"][3]
        assert Decimal(january["income"]) == Decimal("1000")
        assert Decimal(january["result"]) == Decimal("900")
        assert Decimal(april["expense"]) == Decimal("250")
        assert Decimal(data["months"][5]["expense"]) == Decimal("0")

    def test_cash_flow_for_other_year(self, client, stored_entries):
        data = client.get("/overview/cash-flow", params={"year": 2023}).json()
        assert data["year"] == 2023
        assert all(Decimal(m["income"]) == 0 for m in data["months"])

class TestCategories:

    def test_create_and_list(self, client):
        response = client.post("/categories", json={
            "name": "Panel sales", "kind": "income",
            "managerial_group": "Revenue",
        })
        assert response.status_code == 201
        assert response.json()["id"].startswith("panel-sales-")
        assert [c["name"] for c in client.get("/categories").json()] == [
            "Panel sales",
        ]

    def test_category_in_use_cannot_be_deleted(self, client, stored_entries):
        assert client.delete("/categories/cat-office").status_code == 400

    def test_delete_unused_category(self, client, stored_entries):
        assert client.delete("/categories/cat-transfer").status_code == 204
