"""
Expense category taxonomy and display colours.

Analytics treat categories as opaque strings; these tables only feed the
category endpoint and the colour hints attached to dashboard breakdowns.
"""
from types import MappingProxyType

INCOME_CATEGORY = "Income"

EXPENSE_CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Entertainment",
    "Education",
    "Travel",
    "Other",
)

DEFAULT_CATEGORY_COLOR = "#6b7280"

CATEGORY_COLORS = MappingProxyType({
    "Food & Dining": "#ef4444",
    "Transportation": "#f97316",
    "Shopping": "#eab308",
    "Bills & Utilities": "#22c55e",
    "Healthcare": "#06b6d4",
    "Entertainment": "#8b5cf6",
    "Education": "#ec4899",
    "Travel": "#10b981",
    "Other": DEFAULT_CATEGORY_COLOR,
})


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)
