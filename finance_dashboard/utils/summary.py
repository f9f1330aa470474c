"""
Dashboard statistics over a transaction snapshot: headline totals, category
breakdowns and the most recent activity.
"""
from collections import defaultdict
from typing import Any, Dict, List, Sequence

from finance_dashboard.models.transaction import Transaction, TransactionType
from finance_dashboard.utils.months import in_month


def _expenses(transactions: Sequence[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.type == TransactionType.EXPENSE]


def category_expenses(transactions: Sequence[Transaction]) -> List[Dict[str, Any]]:
    totals: Dict[str, float] = defaultdict(float)
    for t in _expenses(transactions):
        totals[t.category] += t.amount
    rows = [{"category": cat, "amount": amount} for cat, amount in totals.items()]
    return sorted(rows, key=lambda row: row["amount"], reverse=True)


def category_breakdown(transactions: Sequence[Transaction]) -> List[Dict[str, Any]]:
    """Amount, count and share of total expenses per category, largest first."""
    expenses = _expenses(transactions)
    total_expenses = sum(t.amount for t in expenses)

    category_data: Dict[str, Dict[str, Any]] = {}
    for t in expenses:
        data = category_data.setdefault(t.category, {"amount": 0.0, "count": 0})
        data["amount"] += t.amount
        data["count"] += 1

    rows = [
        {
            "category": category,
            "amount": data["amount"],
            "count": data["count"],
            "percentage": data["amount"] / total_expenses * 100 if total_expenses > 0 else 0.0,
        }
        for category, data in category_data.items()
    ]
    return sorted(rows, key=lambda row: row["amount"], reverse=True)


def recent_transactions(transactions: Sequence[Transaction], limit: int = 5) -> List[Transaction]:
    ordered = sorted(
        transactions,
        key=lambda t: t.created_at or t.date,
        reverse=True,
    )
    return ordered[:limit]


def summary_totals(transactions: Sequence[Transaction], month: str) -> Dict[str, Any]:
    income = [t for t in transactions if t.type == TransactionType.INCOME]
    expenses = _expenses(transactions)
    total_income = sum(t.amount for t in income)
    total_expenses = sum(t.amount for t in expenses)

    breakdown = category_breakdown(transactions)
    top = breakdown[0] if breakdown else None

    return {
        "total_income": total_income,
        "income_count": len(income),
        "total_expenses": total_expenses,
        "expense_count": len(expenses),
        "net_balance": total_income - total_expenses,
        "month_expenses": sum(t.amount for t in expenses if in_month(t.date, month)),
        "top_category": top,
    }
