from datetime import date

import pytest

from finance_dashboard.core.categories import DEFAULT_CATEGORY_COLOR, category_color
from finance_dashboard.utils.currency import format_currency
from finance_dashboard.utils.months import (
    current_month,
    in_month,
    is_month_key,
    month_name,
    previous_month,
)


@pytest.mark.parametrize(
    "month, expected",
    [("2024-05", "2024-04"), ("2024-01", "2023-12"), ("2024-12", "2024-11")],
)
def test_previous_month(month, expected):
    assert previous_month(month) == expected


def test_current_month_from_reference_date():
    assert current_month(date(2024, 3, 31)) == "2024-03"


def test_month_name():
    assert month_name("2024-05") == "May 2024"


@pytest.mark.parametrize("month", ["2024-5", "2024-13", "May 2024"])
def test_previous_month_rejects_malformed_keys(month):
    with pytest.raises(ValueError):
        previous_month(month)


def test_is_month_key():
    assert is_month_key("2024-05")
    assert not is_month_key("2024-5")
    assert not is_month_key("2024-13")
    assert not is_month_key("")


def test_in_month_matches_by_prefix():
    assert in_month("2024-05-03T10:00:00Z", "2024-05")
    assert not in_month("2024-06-01", "2024-05")


def test_format_currency():
    assert format_currency(250) == "₹250.00"
    assert format_currency(1250.5) == "₹1,250.50"
    assert format_currency(-20) == "-₹20.00"
    assert format_currency(5, symbol="$") == "$5.00"


def test_category_color_falls_back_to_grey():
    assert category_color("Travel") == "#10b981"
    assert category_color("Pets") == DEFAULT_CATEGORY_COLOR
