"""Unit tests for date helpers"""

from datetime import date
from pocket_ledger.utils.date_utils import (
    add_months,
    end_of_month,
    filter_bounds,
    last_n_month_starts,
    month_key,
)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 1, 31), 2) == date(2024, 3, 31)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


def test_end_of_month():
    assert end_of_month(date(2024, 2, 3)) == date(2024, 2, 29)
    assert end_of_month(date(2024, 12, 31)) == date(2024, 12, 31)


def test_last_n_month_starts_crosses_year():
    assert last_n_month_starts(date(2024, 1, 15), 3) == [
        date(2023, 11, 1),
        date(2023, 12, 1),
        date(2024, 1, 1),
    ]


def test_month_key():
    assert month_key(date(2024, 3, 9)) == "2024-03"


def test_filter_bounds():
    today = date(2024, 3, 10)

    assert filter_bounds("all", today) == (None, None)
    assert filter_bounds("recent", today) == (None, None)
    assert filter_bounds("today", today) == (today, today)
    assert filter_bounds("month", today) == (date(2024, 3, 1), date(2024, 3, 31))
    assert filter_bounds("date", today, on=date(2024, 2, 2)) == (date(2024, 2, 2), date(2024, 2, 2))
    assert filter_bounds("range", today, start=date(2024, 1, 1)) == (date(2024, 1, 1), None)
