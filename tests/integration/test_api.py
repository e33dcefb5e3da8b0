"""Integration tests for API endpoints"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from moneydesk.api.main import create_app
from moneydesk.config import Settings
from moneydesk.utils.date_utils import month_key


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["store"] == "sql"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "moneydesk_mutations_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_missing_user_header_rejected(client: TestClient):
    response = client.get("/v1/fixed-deposits", headers={"X-User-ID": ""})
    assert response.status_code == 422


def test_fixed_deposit_preview_matches_created(client: TestClient):
    """Test POST /v1/fixed-deposits stores exactly the previewed projection"""
    payload = {"principal_amount": 100000, "interest_rate": 7.5, "term_months": 12, "start_date": "2024-01-01"}

    preview = client.post("/v1/fixed-deposits/preview", json=payload)
    assert preview.status_code == 200
    assert preview.json()["maturity_date"] == "2025-01-01"
    assert preview.json()["maturity_display"] == "₹1,07,763"

    created = client.post("/v1/fixed-deposits", json={"bank_name": "HDFC Bank", **payload})
    assert created.status_code == 201
    assert created.json()["maturity_amount"] == preview.json()["maturity_amount"]

    listing = client.get("/v1/fixed-deposits").json()
    assert [item["id"] for item in listing["items"]] == [created.json()["id"]]
    assert listing["summary"]["total_principal"] == 100000


def test_fixed_deposit_rejects_non_positive_principal(client: TestClient):
    response = client.post(
        "/v1/fixed-deposits",
        json={"bank_name": "HDFC Bank", "principal_amount": 0, "interest_rate": 7.5, "term_months": 12, "start_date": "2024-01-01"},
    )
    assert response.status_code == 422
    assert client.get("/v1/fixed-deposits").json()["items"] == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"interest_rate": 1e6, "term_months": 120},
        {"term_months": 200000},
        {"principal_amount": 1e308},
        {"start_date": "9990-01-01", "term_months": 600},
    ],
)
def test_fixed_deposit_out_of_range_input_rejected(client: TestClient, overrides: dict):
    """Inputs the projection cannot represent are 422s on both preview and create"""
    payload = {"principal_amount": 100000, "interest_rate": 7.5, "term_months": 12, "start_date": "2024-01-01", **overrides}

    preview = client.post("/v1/fixed-deposits/preview", json=payload)
    created = client.post("/v1/fixed-deposits", json={"bank_name": "HDFC Bank", **payload})

    assert preview.status_code == 422
    assert created.status_code == 422
    assert client.get("/v1/fixed-deposits").json()["items"] == []


def test_fixed_deposit_preview_does_not_open_the_store(tmp_path):
    app = create_app(Settings(store_backend="sql", database_url=f"sqlite:///{tmp_path}/preview.db"))
    app.state.session_factory = None
    client = TestClient(app)

    response = client.post(
        "/v1/fixed-deposits/preview",
        json={"principal_amount": 100000, "interest_rate": 7.5, "term_months": 12, "start_date": "2024-01-01"},
    )

    assert response.status_code == 200
    assert response.json()["maturity_display"] == "₹1,07,763"


def test_fixed_deposit_delete_is_owner_scoped(client: TestClient):
    created = client.post(
        "/v1/fixed-deposits",
        json={"bank_name": "SBI", "principal_amount": 5000, "interest_rate": 6, "term_months": 6, "start_date": "2024-01-01"},
    ).json()

    other_user = client.delete(f"/v1/fixed-deposits/{created['id']}", headers={"X-User-ID": "user_b"})
    assert other_user.status_code == 404

    response = client.delete(f"/v1/fixed-deposits/{created['id']}")
    assert response.status_code == 204
    assert client.get("/v1/fixed-deposits").json()["items"] == []


def test_emi_reminder_paid_cycle_flow(client: TestClient):
    """Create, mark paid, then reopen the next monthly cycle"""
    created = client.post(
        "/v1/emi-reminders",
        json={"loan_name": "Car Loan", "bank_name": "SBI", "loan_amount": 800000, "emi_amount": 15000, "due_day": 5},
    )
    assert created.status_code == 201
    reminder = created.json()
    assert reminder["status"] == "active"
    assert date.fromisoformat(reminder["next_due_date"]).day == 5

    paid = client.post(f"/v1/emi-reminders/{reminder['id']}/paid")
    assert paid.status_code == 200
    assert paid.json()["status_label"] == "Paid"
    assert client.post(f"/v1/emi-reminders/{reminder['id']}/paid").json()["status"] == "paid"

    reopened = client.post(f"/v1/emi-reminders/{reminder['id']}/next-cycle")
    assert reopened.status_code == 200
    assert reopened.json()["status"] == "active"
    assert reopened.json()["next_due_date"] > reminder["next_due_date"]

    summary = client.get("/v1/emi-reminders").json()["summary"]
    assert summary["active_count"] == 1
    assert summary["total_monthly_emi"] == 15000


def test_emi_reminder_next_cycle_requires_paid(client: TestClient):
    reminder = client.post(
        "/v1/emi-reminders",
        json={"loan_name": "Home Loan", "bank_name": "HDFC", "loan_amount": 2500000, "emi_amount": 22000, "due_day": 10},
    ).json()

    response = client.post(f"/v1/emi-reminders/{reminder['id']}/next-cycle")
    assert response.status_code == 422


def test_emi_reminder_update_moves_due_date(client: TestClient):
    reminder = client.post(
        "/v1/emi-reminders",
        json={"loan_name": "Home Loan", "bank_name": "HDFC", "loan_amount": 2500000, "emi_amount": 22000, "due_day": 10},
    ).json()

    response = client.patch(f"/v1/emi-reminders/{reminder['id']}", json={"due_day": 20})

    assert response.status_code == 200
    assert date.fromisoformat(response.json()["next_due_date"]).day == 20


@pytest.mark.parametrize("due_day", [0, 29, 31])
def test_emi_reminder_rejects_bad_due_day(client: TestClient, due_day: int):
    response = client.post(
        "/v1/emi-reminders",
        json={"loan_name": "Car Loan", "bank_name": "SBI", "loan_amount": 800000, "emi_amount": 15000, "due_day": due_day},
    )
    assert response.status_code == 422


def test_budget_put_twice_keeps_one_record(client: TestClient):
    """Test PUT /v1/budgets upserts on (user, category, month)"""
    first = client.put("/v1/budgets", json={"category_name": "Groceries", "budgeted_amount": 5000})
    spent = client.patch(f"/v1/budgets/{first.json()['id']}/spent", json={"spent_amount": 4500})
    second = client.put("/v1/budgets", json={"category_name": "Groceries", "budgeted_amount": 6000})

    assert first.status_code == second.status_code == 200
    assert spent.json()["status"] == "near limit"
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["spent_amount"] == 4500

    listing = client.get("/v1/budgets").json()
    assert len(listing["items"]) == 1
    assert listing["summary"]["month_year"] == month_key(date.today())
    assert listing["summary"]["total_budgeted"] == 6000


def test_budget_rejects_unknown_category_and_bad_month(client: TestClient):
    assert client.put("/v1/budgets", json={"category_name": "Gadgets", "budgeted_amount": 100}).status_code == 422
    assert client.get("/v1/budgets", params={"month_year": "2024-13"}).status_code == 422


def test_savings_goal_crud(client: TestClient):
    target_date = (date.today() + timedelta(days=30)).isoformat()
    created = client.post(
        "/v1/savings-goals",
        json={"title": "Goa trip", "category": "Vacation", "target_amount": 50000, "current_amount": 10000, "target_date": target_date},
    )
    assert created.status_code == 201
    goal = created.json()
    assert goal["progress"] == 20.0
    assert goal["deadline_label"] == "30 days"

    updated = client.patch(f"/v1/savings-goals/{goal['id']}", json={"current_amount": 75000})
    assert updated.status_code == 200
    assert updated.json()["progress"] == 100.0
    assert updated.json()["status"] == "completed"

    summary = client.get("/v1/savings-goals").json()["summary"]
    assert summary["completed_count"] == 1

    assert client.delete(f"/v1/savings-goals/{goal['id']}").status_code == 204
    assert client.get("/v1/savings-goals").json()["items"] == []


def test_unknown_id_is_not_found(client: TestClient):
    assert client.patch("/v1/savings-goals/missing", json={"title": "x"}).status_code == 404
    assert client.post("/v1/emi-reminders/missing/paid").status_code == 404
    assert client.patch("/v1/budgets/missing/spent", json={"spent_amount": 1}).status_code == 404


def test_memory_backend_serves_same_routes():
    app = create_app(Settings(store_backend="memory"))
    client = TestClient(app, headers={"X-User-ID": "user_a"})

    created = client.put("/v1/budgets", json={"category_name": "Travel", "budgeted_amount": 1000, "month_year": "2024-05"})
    listing = client.get("/v1/budgets", params={"month_year": "2024-05"}).json()

    assert created.status_code == 200
    assert client.get("/health").json()["store"] == "memory"
    assert [item["id"] for item in listing["items"]] == [created.json()["id"]]
