import uuid

from finance_dashboard.core.config import settings

API = settings.API_PREFIX


def create_transaction(client, **overrides):
    payload = {
        "amount": 120.0,
        "date": "2024-05-03",
        "description": "Groceries",
        "type": "expense",
        "category": "Food & Dining",
    }
    payload.update(overrides)
    return client.post(f"{API}/transactions/", json=payload)


def create_budget(client, **overrides):
    payload = {"category": "Food & Dining", "amount": 100.0, "month": "2024-05"}
    payload.update(overrides)
    return client.post(f"{API}/budgets/", json=payload)


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_list_transactions(client, store):
    response = create_transaction(client)
    assert response.status_code == 201
    body = response.json()
    assert body["category"] == "Food & Dining"
    assert body["transaction_id"] in store.transactions

    listed = client.get(f"{API}/transactions/").json()
    assert [t["transaction_id"] for t in listed] == [body["transaction_id"]]


def test_income_is_filed_under_income_category(client):
    response = create_transaction(client, type="income", category="Food & Dining", description="Salary")
    assert response.status_code == 201
    assert response.json()["category"] == "Income"


def test_expense_requires_category(client):
    response = create_transaction(client, category="")
    assert response.status_code == 422


def test_transaction_amount_must_be_positive(client):
    assert create_transaction(client, amount=0).status_code == 422


def test_update_transaction(client):
    transaction_id = create_transaction(client).json()["transaction_id"]
    response = client.put(f"{API}/transactions/{transaction_id}", json={"amount": 80.5})
    assert response.status_code == 200
    assert response.json()["amount"] == 80.5


def test_update_transaction_to_income_rewrites_category(client):
    transaction_id = create_transaction(client).json()["transaction_id"]
    response = client.put(f"{API}/transactions/{transaction_id}", json={"type": "income"})
    assert response.json()["category"] == "Income"


def test_update_unknown_transaction_is_404(client):
    response = client.put(f"{API}/transactions/{uuid.uuid4()}", json={"amount": 10})
    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


def test_invalid_transaction_id_is_400(client):
    response = client.delete(f"{API}/transactions/not-an-id")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid transaction ID"


def test_delete_transaction(client, store):
    transaction_id = create_transaction(client).json()["transaction_id"]
    response = client.delete(f"{API}/transactions/{transaction_id}")
    assert response.status_code == 200
    assert store.transactions == {}
    assert client.delete(f"{API}/transactions/{transaction_id}").status_code == 404


def test_duplicate_budget_is_conflict(client):
    assert create_budget(client).status_code == 201
    response = create_budget(client, amount=300.0)
    assert response.status_code == 409
    assert response.json()["detail"] == "Budget already exists for this category and month"


def test_list_budgets_filters_by_month(client):
    create_budget(client, category="Travel")
    create_budget(client, category="Shopping")
    create_budget(client, category="Travel", month="2024-06")

    may = client.get(f"{API}/budgets/", params={"month": "2024-05"}).json()
    assert [b["category"] for b in may] == ["Shopping", "Travel"]
    assert len(client.get(f"{API}/budgets/").json()) == 3


def test_list_budgets_rejects_bad_month(client):
    assert client.get(f"{API}/budgets/", params={"month": "May"}).status_code == 422


def test_update_budget(client):
    budget_id = create_budget(client).json()["budget_id"]
    response = client.put(f"{API}/budgets/{budget_id}", json={"amount": 250.0})
    assert response.status_code == 200
    assert response.json()["amount"] == 250.0


def test_update_budget_into_taken_category_is_conflict(client):
    create_budget(client, category="Travel")
    budget_id = create_budget(client, category="Shopping").json()["budget_id"]
    response = client.put(f"{API}/budgets/{budget_id}", json={"category": "Travel"})
    assert response.status_code == 409


def test_update_budget_without_fields_is_400(client):
    budget_id = create_budget(client).json()["budget_id"]
    assert client.put(f"{API}/budgets/{budget_id}", json={}).status_code == 400


def test_delete_unknown_budget_is_404(client):
    assert client.delete(f"{API}/budgets/{uuid.uuid4()}").status_code == 404


def test_dashboard(client):
    create_budget(client, category="Food", amount=100.0)
    create_transaction(client, category="Food", amount=120.0)
    create_transaction(client, type="income", amount=3000.0, description="Salary")

    response = client.get(f"{API}/dashboard/", params={"month": "2024-05", "today": "2024-05-15"})
    assert response.status_code == 200
    body = response.json()

    assert body["month_name"] == "May 2024"
    assert body["summary"]["net_balance"] == 2880.0
    assert body["budget_comparisons"] == [
        {
            "category": "Food",
            "budgeted": 100.0,
            "actual": 120.0,
            "remaining": -20.0,
            "percentage": 120.0,
            "status": "over",
        }
    ]
    assert body["insights"] == [
        {
            "type": "warning",
            "title": "Budget Exceeded",
            "description": "You've exceeded your Food budget by 20.0%",
            "category": "Food",
            "value": "₹20.00",
        }
    ]
    assert body["category_breakdown"][0]["color"] == "#6b7280"
    assert body["category_expenses"] == [{"category": "Food", "amount": 120.0, "color": "#6b7280"}]
    assert len(body["recent_transactions"]) == 2


def test_dashboard_defaults_to_reference_month(client):
    response = client.get(f"{API}/dashboard/", params={"today": "2024-02-10"})
    body = response.json()
    assert body["month"] == "2024-02"
    assert [i["title"] for i in body["insights"]] == ["Staying on Track"]


def test_categories(client):
    body = client.get(f"{API}/categories/").json()
    assert "Food & Dining" in body["categories"]
    assert body["colors"]["Travel"] == "#10b981"
