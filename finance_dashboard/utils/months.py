"""
Month-key helpers.

A month key is a zero-padded "YYYY-MM" string. Dates are matched against it by
prefix, so "2024-05-03" and "2024-05-03T10:00:00Z" both belong to "2024-05".
"""
import re
from datetime import date, datetime, timezone
from typing import Optional

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
MONTH_KEY_RE = re.compile(MONTH_PATTERN)


def is_month_key(value: str) -> bool:
    return bool(MONTH_KEY_RE.match(value or ""))


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def current_month(today: Optional[date] = None) -> str:
    today = today or utc_today()
    return today.strftime("%Y-%m")


def previous_month(month: str) -> str:
    """Return the month key immediately before ``month`` ("2024-01" -> "2023-12")."""
    if not is_month_key(month):
        raise ValueError(f"Invalid month key: {month!r}")
    year, mon = (int(part) for part in month.split("-"))
    if mon == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{mon - 1:02d}"


def month_name(month: str) -> str:
    """Human-readable label, e.g. "2024-05" -> "May 2024"."""
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")


def in_month(date_str: str, month: str) -> bool:
    return date_str.startswith(month)
