import pytest
from fastapi.testclient import TestClient

from finance_dashboard.core.exceptions import DuplicateKeyError, NotFoundError
from finance_dashboard.db import dynamo
from finance_dashboard.main import app


class InMemoryStore:
    """Dict-backed stand-in for the DynamoDB record store functions."""

    def __init__(self):
        self.transactions = {}
        self.budgets = {}

    def list_transactions(self):
        return sorted(self.transactions.values(), key=lambda t: t["created_at"], reverse=True)

    def get_transaction(self, transaction_id):
        return self.transactions.get(transaction_id)

    def put_transaction(self, item):
        self.transactions[item["transaction_id"]] = dict(item)
        return item

    def update_transaction(self, transaction_id, updates):
        if transaction_id not in self.transactions:
            raise NotFoundError("Transaction not found")
        self.transactions[transaction_id].update(updates)
        return dict(self.transactions[transaction_id])

    def delete_transaction(self, transaction_id):
        if transaction_id not in self.transactions:
            raise NotFoundError("Transaction not found")
        return self.transactions.pop(transaction_id)

    def list_budgets(self, month=None):
        budgets = [b for b in self.budgets.values() if month is None or b["month"] == month]
        return sorted(budgets, key=lambda b: b["category"])

    def get_budget(self, budget_id):
        return self.budgets.get(budget_id)

    def _check_unique(self, category, month, exclude_id=None):
        for b in self.budgets.values():
            if b["category"] == category and b["month"] == month and b["budget_id"] != exclude_id:
                raise DuplicateKeyError("Budget already exists for this category and month")

    def put_budget(self, item):
        self._check_unique(item["category"], item["month"])
        self.budgets[item["budget_id"]] = dict(item)
        return item

    def update_budget(self, budget_id, updates):
        if budget_id not in self.budgets:
            raise NotFoundError("Budget not found")
        existing = self.budgets[budget_id]
        self._check_unique(
            updates.get("category", existing["category"]),
            updates.get("month", existing["month"]),
            exclude_id=budget_id,
        )
        existing.update(updates)
        return dict(existing)

    def delete_budget(self, budget_id):
        if budget_id not in self.budgets:
            raise NotFoundError("Budget not found")
        return self.budgets.pop(budget_id)


STORE_FUNCTIONS = [
    "list_transactions", "get_transaction", "put_transaction", "update_transaction", "delete_transaction",
    "list_budgets", "get_budget", "put_budget", "update_budget", "delete_budget",
]


@pytest.fixture
def store(monkeypatch):
    fake = InMemoryStore()
    for name in STORE_FUNCTIONS:
        monkeypatch.setattr(dynamo, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(store):
    return TestClient(app)
