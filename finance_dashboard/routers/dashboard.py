"""
Dashboard Router
Composes stored transactions and budgets into the figures the dashboard shows
"""
import logging
from datetime import date
from typing import Dict, Optional

from fastapi import APIRouter, Query

from finance_dashboard.core.categories import CATEGORY_COLORS, EXPENSE_CATEGORIES, category_color
from finance_dashboard.core.config import settings
from finance_dashboard.db import dynamo
from finance_dashboard.models.budget import MONTH_PATTERN, Budget
from finance_dashboard.models.transaction import Transaction
from finance_dashboard.utils.analyzer import BudgetAnalyzer, InsightThresholds
from finance_dashboard.utils.months import current_month, month_name
from finance_dashboard.utils.summary import (
    category_breakdown,
    category_expenses,
    recent_transactions,
    summary_totals,
)

router = APIRouter()
categories_router = APIRouter()
logger = logging.getLogger(__name__)
budget_analyzer = BudgetAnalyzer(InsightThresholds.from_settings())


@router.get("/")
def get_dashboard(
    month: Optional[str] = Query(default=None, pattern=MONTH_PATTERN),
    today: Optional[date] = Query(default=None, description="Reference date for insights, defaults to today (UTC)"),
) -> Dict:
    """
    Summary figures, category breakdown, recent activity, budget comparisons and
    spending insights for one month (the current month when omitted).
    """
    month = month or current_month(today)
    transactions = [Transaction.model_validate(item) for item in dynamo.list_transactions()]
    budgets = [Budget.model_validate(item) for item in dynamo.list_budgets(month)]
    logger.info(f"Building dashboard for {month}: {len(transactions)} transactions, {len(budgets)} budgets")

    comparisons = budget_analyzer.compare_budgets(budgets, transactions, month)
    insights = budget_analyzer.generate_insights(transactions, comparisons, reference_date=today)

    breakdown = [
        {**row, "color": category_color(row["category"])}
        for row in category_breakdown(transactions)
    ]

    return {
        "month": month,
        "month_name": month_name(month),
        "summary": summary_totals(transactions, month),
        "category_expenses": [
            {**row, "color": category_color(row["category"])}
            for row in category_expenses(transactions)
        ],
        "category_breakdown": breakdown,
        "recent_transactions": [
            t.model_dump() for t in recent_transactions(transactions, settings.RECENT_TRANSACTIONS_LIMIT)
        ],
        "budget_comparisons": [c.model_dump() for c in comparisons],
        "insights": [i.to_dict() for i in insights],
    }


@categories_router.get("/")
def list_categories() -> Dict:
    return {
        "categories": list(EXPENSE_CATEGORIES),
        "colors": dict(CATEGORY_COLORS),
    }
