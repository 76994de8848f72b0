# tests/test_api.py
import uuid
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from finance_tracker.core.database import AsyncSessionLocal, Base, engine
from finance_tracker.core.security import create_access_token
from finance_tracker.crud.category import seed_default_categories
from finance_tracker.main import app
from helpers import make_user


async def _reset_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        await seed_default_categories(session)


async def _add_user(username, role="User", is_active=True):
    async with AsyncSessionLocal() as session:
        return await make_user(session, username, role=role, is_active=is_active)


def _auth(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture(scope="module")
def app_client():
    with TestClient(app) as c:
        yield c
        c.portal.call(engine.dispose)


@pytest.fixture
def client(app_client):
    app_client.portal.call(_reset_database)
    return app_client


@pytest.fixture
def alice(client):
    return client.portal.call(_add_user, "alice")


@pytest.fixture
def admin(client):
    return client.portal.call(_add_user, "root", "Admin")


def _category_id(client, user, name="Food"):
    categories = client.get("/api/v1/categories", headers=_auth(user)).json()
    return next(c["id"] for c in categories if c["name"] == name)


# ------------------------------------------------------------
# Service endpoints and auth
# ------------------------------------------------------------
def test_root_and_health(client):
    assert client.get("/").json()["version"] == "1.0.0"
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"


def test_requests_without_token_are_rejected(client):
    assert client.get("/api/v1/dashboard").status_code == 401
    assert client.get("/api/v1/dashboard", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_expired_token_is_rejected(client, alice):
    token = create_access_token(alice.id, expires_delta=timedelta(minutes=-5))
    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_in_cookie_is_accepted(client, alice):
    client.cookies.set("access_token", create_access_token(alice.id))
    try:
        response = client.get("/api/v1/users/me")
    finally:
        client.cookies.clear()
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_inactive_user_is_rejected(client):
    ghost = client.portal.call(_add_user, "ghost", "User", False)
    assert client.get("/api/v1/users/me", headers=_auth(ghost)).status_code == 401


def test_admin_routes_need_admin_role(client, alice, admin):
    assert client.get("/api/v1/dashboard/admin", headers=_auth(alice)).status_code == 403
    response = client.get("/api/v1/dashboard/admin", headers=_auth(admin))
    assert response.status_code == 200
    body = response.json()
    assert body["total_users"] == 2
    assert body["total_expenses"] == 0


# ------------------------------------------------------------
# Categories
# ------------------------------------------------------------
def test_default_categories_are_seeded(client, alice):
    names = [c["name"] for c in client.get("/api/v1/categories", headers=_auth(alice)).json()]
    assert len(names) == 9
    assert {"Food", "Transport", "Bills", "Others"} <= set(names)


def test_admin_category_management(client, admin):
    headers = _auth(admin)
    dup = client.post("/api/v1/categories", json={"name": "food", "icon": "x", "color": "#000000"}, headers=headers)
    assert dup.status_code == 409

    created = client.post(
        "/api/v1/categories",
        json={"name": "Pets", "icon": "paw", "color": "#123ABC"},
        headers=headers,
    )
    assert created.status_code == 201
    pets_id = created.json()["id"]

    hidden = client.patch(f"/api/v1/categories/{pets_id}", json={"is_active": False}, headers=headers)
    assert hidden.json()["is_active"] is False
    active = client.get("/api/v1/categories", headers=headers).json()
    everything = client.get("/api/v1/categories?include_inactive=true", headers=headers).json()
    assert len(everything) == len(active) + 1

    food_id = _category_id(client, admin)
    assert client.delete(f"/api/v1/categories/{food_id}", headers=headers).status_code == 400
    assert client.delete(f"/api/v1/categories/{pets_id}", headers=headers).status_code == 204


def test_non_admin_cannot_create_category(client, alice):
    response = client.post(
        "/api/v1/categories",
        json={"name": "Pets", "icon": "paw", "color": "#123ABC"},
        headers=_auth(alice),
    )
    assert response.status_code == 403


# ------------------------------------------------------------
# Expenses
# ------------------------------------------------------------
def test_expense_lifecycle(client, alice):
    headers = _auth(alice)
    food_id = _category_id(client, alice)

    created = client.post(
        "/api/v1/expenses",
        json={"amount": "120.50", "category_id": food_id, "date": "2024-01-15", "notes": "groceries"},
        headers=headers,
    )
    assert created.status_code == 201
    expense = created.json()
    assert expense["category_name"] == "Food"
    assert expense["amount"] == 120.5

    bills_id = _category_id(client, alice, "Bills")
    updated = client.patch(f"/api/v1/expenses/{expense['id']}", json={"category_id": bills_id}, headers=headers)
    assert updated.json()["category_name"] == "Bills"

    assert client.delete(f"/api/v1/expenses/{expense['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/v1/expenses/{expense['id']}", headers=headers).status_code == 404


def test_expense_amount_must_be_positive(client, alice):
    response = client.post(
        "/api/v1/expenses",
        json={"amount": 0, "category_id": _category_id(client, alice), "date": "2024-01-15"},
        headers=_auth(alice),
    )
    assert response.status_code == 422


def test_expenses_are_paginated_and_private(client, alice):
    headers = _auth(alice)
    food_id = _category_id(client, alice)
    for day in range(1, 6):
        client.post(
            "/api/v1/expenses",
            json={"amount": 10, "category_id": food_id, "date": f"2024-01-0{day}"},
            headers=headers,
        )

    page = client.get("/api/v1/expenses?page=2&page_size=2", headers=headers).json()
    assert page["total_count"] == 5
    assert page["total_pages"] == 3
    assert page["has_next_page"] is True
    assert page["has_previous_page"] is True
    assert [e["date"] for e in page["items"]] == ["2024-01-03", "2024-01-02"]

    ranged = client.get("/api/v1/expenses?start_date=2024-01-02&end_date=2024-01-04", headers=headers).json()
    assert ranged["total_count"] == 2

    bob = client.portal.call(_add_user, "bob")
    assert client.get("/api/v1/expenses", headers=_auth(bob)).json()["total_count"] == 0
    other = page["items"][0]["id"]
    assert client.get(f"/api/v1/expenses/{other}", headers=_auth(bob)).status_code == 404


# ------------------------------------------------------------
# Budgets and dashboard
# ------------------------------------------------------------
def test_budget_upsert_and_status(client, alice):
    headers = _auth(alice)
    assert client.get("/api/v1/budgets/2024/1", headers=headers).json() is None

    client.post(
        "/api/v1/expenses",
        json={"amount": 30000, "category_id": _category_id(client, alice), "date": "2024-01-10"},
        headers=headers,
    )
    first = client.post("/api/v1/budgets", json={"amount": 100000, "month": 1, "year": 2024}, headers=headers)
    assert first.json()["status"] == "Good"

    second = client.post("/api/v1/budgets", json={"amount": 50000, "month": 1, "year": 2024}, headers=headers)
    view = second.json()
    assert view["id"] == first.json()["id"]
    assert view["spent"] == 30000
    assert view["remaining"] == 20000
    assert view["percentage_used"] == 60.0
    assert view["status"] == "Warning"

    assert len(client.get("/api/v1/budgets", headers=headers).json()) == 1
    assert client.delete(f"/api/v1/budgets/{view['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/v1/budgets/{view['id']}", headers=headers).status_code == 404


def test_dashboard_endpoint(client, alice):
    headers = _auth(alice)
    food_id = _category_id(client, alice)
    for amount, day in [(300, "2024-01-05"), (200, "2023-12-20")]:
        client.post("/api/v1/expenses", json={"amount": amount, "category_id": food_id, "date": day}, headers=headers)

    response = client.get("/api/v1/dashboard?month=1&year=2024", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total_spent_this_month"] == 300
    assert body["total_spent_last_month"] == 200
    assert body["percentage_change"] == 50.0
    assert body["average_per_day"] == round(300 / 31, 2)
    assert body["current_budget"] is None
    assert body["top_categories"][0]["category_name"] == "Food"
    assert len(body["monthly_trend"]) == 6
    assert body["motivational_message"]


def test_dashboard_rejects_bad_month(client, alice):
    assert client.get("/api/v1/dashboard?month=13&year=2024", headers=_auth(alice)).status_code == 422


# ------------------------------------------------------------
# Savings
# ------------------------------------------------------------
def test_savings_flow(client, alice):
    headers = _auth(alice)
    goal = client.post("/api/v1/savings/goals", json={"name": "Trip", "target_amount": 10000}, headers=headers).json()
    assert goal["icon"] == "piggy-bank"
    assert goal["current_amount"] == 0
    tx_url = f"/api/v1/savings/goals/{goal['id']}/transactions"

    assert client.post(tx_url, json={"amount": 6000}, headers=headers).status_code == 201
    assert client.post(tx_url, json={"amount": 5000, "type": "deposit"}, headers=headers).status_code == 201

    reached = client.get(f"/api/v1/savings/goals/{goal['id']}", headers=headers).json()
    assert reached["current_amount"] == 11000
    assert reached["is_completed"] is True
    assert reached["remaining_amount"] == 0

    too_much = client.post(tx_url, json={"amount": 20000, "type": "withdraw"}, headers=headers)
    assert too_much.status_code == 400
    assert too_much.json()["detail"] == "insufficient_balance"

    zero = client.post(tx_url, json={"amount": 0}, headers=headers)
    assert zero.status_code == 400
    assert zero.json()["detail"] == "invalid_amount"

    missing = client.post(f"/api/v1/savings/goals/{uuid.uuid4()}/transactions", json={"amount": 5}, headers=headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "goal_not_found"

    ledger = client.get(tx_url, headers=headers).json()
    assert len(ledger) == 2
    recent = client.get("/api/v1/savings/transactions/recent", headers=headers).json()
    assert all(tx["goal_name"] == "Trip" for tx in recent)

    summary = client.get("/api/v1/savings/summary", headers=headers).json()
    assert summary["total_saved"] == 11000
    assert summary["completed_goals"] == 1


def test_savings_goals_are_private(client, alice):
    goal = client.post(
        "/api/v1/savings/goals", json={"name": "Car", "target_amount": 500}, headers=_auth(alice)
    ).json()
    bob = client.portal.call(_add_user, "bob")

    assert client.get(f"/api/v1/savings/goals/{goal['id']}", headers=_auth(bob)).status_code == 404
    deposit = client.post(
        f"/api/v1/savings/goals/{goal['id']}/transactions", json={"amount": 10}, headers=_auth(bob)
    )
    assert deposit.status_code == 404


# ------------------------------------------------------------
# Users (admin)
# ------------------------------------------------------------
def test_admin_user_management(client, admin):
    headers = _auth(admin)
    payload = {"username": "carol", "email": "carol@example.com", "first_name": "Carol", "last_name": "Doe"}

    created = client.post("/api/v1/users", json=payload, headers=headers)
    assert created.status_code == 201
    carol = created.json()
    assert carol["role"] == "User"
    assert client.post("/api/v1/users", json=payload, headers=headers).status_code == 409

    toggled = client.post(f"/api/v1/users/{carol['id']}/toggle-active", headers=headers).json()
    assert toggled["is_active"] is False

    summaries = client.get("/api/v1/users/summaries", headers=headers).json()
    assert {s["username"] for s in summaries} == {"root", "carol"}

    assert client.delete(f"/api/v1/users/{carol['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/v1/users/{carol['id']}", headers=headers).status_code == 404
    assert [u["username"] for u in client.get("/api/v1/users", headers=headers).json()] == ["root"]
