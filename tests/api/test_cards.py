"""
Tests for the card registry and card expense endpoints.
"""

import pytest

from tests.factories import seed_catalogue


def batch_payload(*lines, card_name="Nubank", holder="Maria"):
    return {
        "card_name": card_name,
        "holder": holder,
        "batch_id": "b1",
        "lines": list(lines),
    }


def line(**overrides):
    payload = {
        "date": "2024-03-10",
        "description": "Panels",
        "category_id": "cat-supplier",
        "billing_mode": "single",
        "count": 1,
        "amount": "100.00",
    }
    payload.update(overrides)
    return payload


class TestCardRegistry:

    def test_create_card_keeps_last_four_digits(self, client):
        response = client.post("/cards", json={
            "name": "Nubank",
            "card_number": "5555 4444 3333 1234",
            "closing_day": 15,
            "due_day": 10,
        })
        assert response.status_code == 201
        data = response.json()
        assert data["last_digits"] == "1234"
        assert data["closing_day"] == 15

    def test_duplicate_name_returns_400(self, client):
        client.post("/cards", json={"name": "Itau"})
        response = client.post("/cards", json={"name": "Itau"})
        assert response.status_code == 400

    def test_days_out_of_range_return_422(self, client):
        response = client.post(
            "/cards", json={"name": "Itau", "closing_day": 32}
        )
        assert response.status_code == 422

    def test_block_card(self, client):
        card_id = client.post("/cards", json={"name": "Itau"}).json()["id"]
        response = client.put(
            f"/cards/{card_id}", json={"name": "Itau", "active": False}
        )
        assert response.status_code == 200
        assert client.get("/cards").json()[0]["active"] is False

    def test_update_unknown_card_returns_404(self, client):
        response = client.put("/cards/nope", json={"name": "Itau"})
        assert response.status_code == 404


class TestCardExpenses:

    @pytest.fixture(autouse=True)
    def seeded(self, db_session):
        seed_catalogue(db_session)

    def test_installments_are_saved(self, client):
        response = client.post("/cards/expenses", json=batch_payload(
            line(billing_mode="installment", count=3),
        ))

        assert response.status_code == 201
        data = response.json()
        assert [e["amount"] for e in data] == ["33.34"] * 3
        assert [e["due_date"] for e in data] == [
            "2024-04-10", "2024-05-10", "2024-06-10",
        ]
        assert data[0]["id"] == "cc-b1-1-1"
        assert data[0]["card_label"] == "Nubank **** 1234"

        listed = client.get("/entries").json()
        assert [item["view"] for item in listed] == ["invoice"] * 3

    def test_invalid_line_saves_nothing(self, client):
        response = client.post("/cards/expenses", json=batch_payload(
            line(),
            line(description="", amount="0"),
        ))

        assert response.status_code == 422
        errors = response.json()["detail"]["errors"]
        assert set(errors) == {"1"}
        assert set(errors["1"]) == {"description", "amount"}
        assert client.get("/entries").json() == []

    def test_unknown_card_returns_422(self, client):
        response = client.post(
            "/cards/expenses", json=batch_payload(line(), card_name="Amex")
        )
        assert response.status_code == 422
        assert response.json()["detail"]["errors"]["batch"] == {
            "card_name": "unknown card",
        }

    def test_empty_batch_returns_422(self, client):
        response = client.post("/cards/expenses", json=batch_payload())
        assert response.status_code == 422
