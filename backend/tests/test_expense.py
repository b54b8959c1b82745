import pytest

from fintrack.db import models


def add_expense(client, headers, amount=50, category="Food & Dining", date="2024-03-05", **extra):
    payload = {"amount": amount, "category": category, "date": date}
    payload.update(extra)
    return client.post("/api/v1/expense", json=payload, headers=headers)


def test_create_expense_defaults_description(client, auth):
    r = add_expense(client, auth["headers"])
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["category"] == "Food & Dining"
    assert data["description"] == ""
    assert data["userId"] == auth["user"]["id"]


@pytest.mark.parametrize("category", ["Groceries", "food & dining", "", None, 3])
def test_unknown_categories_are_rejected(client, auth, db_session, category):
    r = add_expense(client, auth["headers"], category=category)
    assert r.status_code == 400
    assert r.json()["message"] == "Please select a valid category"
    assert db_session.query(models.Expense).count() == 0


def test_every_known_category_is_accepted(client, auth):
    for category in models.ExpenseCategory:
        r = add_expense(client, auth["headers"], category=category.value)
        assert r.status_code == 201, r.text
    r = client.get("/api/v1/expense", headers=auth["headers"])
    assert r.json()["count"] == len(models.ExpenseCategory)


def test_description_length_limit(client, auth):
    r = add_expense(client, auth["headers"], description="d" * 201)
    assert r.status_code == 400
    assert r.json()["message"] == "Description cannot exceed 200 characters"
    assert add_expense(client, auth["headers"], description="d" * 200).status_code == 201


def test_update_then_fetch_round_trip(client, auth):
    expense_id = add_expense(client, auth["headers"]).json()["data"]["id"]
    update = {"amount": 42.75, "category": "Transportation", "description": "Train pass", "date": "2024-03-20"}
    r = client.put(f"/api/v1/expense/{expense_id}", json=update, headers=auth["headers"])
    assert r.status_code == 200, r.text

    r = client.get(f"/api/v1/expense/{expense_id}", headers=auth["headers"])
    data = r.json()["data"]
    assert data["amount"] == 42.75
    assert data["category"] == "Transportation"
    assert data["description"] == "Train pass"
    assert data["date"] == "2024-03-20"


def test_update_rejects_unknown_category(client, auth):
    expense_id = add_expense(client, auth["headers"]).json()["data"]["id"]
    update = {"amount": 10, "category": "Gadgets", "date": "2024-03-20"}
    r = client.put(f"/api/v1/expense/{expense_id}", json=update, headers=auth["headers"])
    assert r.status_code == 400
    assert client.get(f"/api/v1/expense/{expense_id}", headers=auth["headers"]).json()["data"]["category"] == "Food & Dining"


def test_list_filters_by_category_and_month(client, auth):
    add_expense(client, auth["headers"], amount=50, category="Food & Dining", date="2024-03-05")
    add_expense(client, auth["headers"], amount=30, category="Food & Dining", date="2024-03-31")
    add_expense(client, auth["headers"], amount=999, category="Shopping", date="2024-03-10")
    add_expense(client, auth["headers"], amount=70, category="Food & Dining", date="2024-04-01")

    r = client.get("/api/v1/expense", params={"month": 3, "year": 2024, "category": "Food & Dining"}, headers=auth["headers"])
    body = r.json()
    assert body["count"] == 2
    assert body["total"] == 80
    assert [e["date"] for e in body["data"]] == ["2024-03-31", "2024-03-05"]

    r = client.get("/api/v1/expense", params={"category": "Food & Dining"}, headers=auth["headers"])
    assert r.json()["total"] == 150

    r = client.get("/api/v1/expense", params={"category": "Gadgets"}, headers=auth["headers"])
    assert r.status_code == 400


def test_other_users_expenses_are_invisible(client, auth, other_auth):
    add_expense(client, other_auth["headers"], amount=12)
    r = client.get("/api/v1/expense", headers=auth["headers"])
    assert r.json() == {"success": True, "data": [], "total": 0, "count": 0}
