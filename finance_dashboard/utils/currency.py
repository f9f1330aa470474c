from typing import Optional

from finance_dashboard.core.config import settings


def format_currency(amount: float, symbol: Optional[str] = None) -> str:
    """Format an amount for display, e.g. 1250.5 -> "₹1,250.50"."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
