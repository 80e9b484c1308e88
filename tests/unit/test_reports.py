"""Unit tests for dashboard and report rollups"""

import pytest
from datetime import date
from pocket_ledger.domain.models import LedgerEntry
from pocket_ledger.domain.reports import (
    monthly_balance_history,
    monthly_income_expense,
    summarize_balances,
)

TODAY = date(2024, 3, 10)


@pytest.fixture
def entries() -> list[LedgerEntry]:
    return [
        LedgerEntry(date=date(2023, 6, 1), amount_cents=50000, type="income"),  # Before the window
        LedgerEntry(date=date(2024, 1, 5), amount_cents=100000, type="income"),
        LedgerEntry(date=date(2024, 2, 10), amount_cents=30000, type="expense"),
        LedgerEntry(date=date(2024, 3, 1), amount_cents=20000, type="income"),
    ]


def test_summarize_balances(entries):
    summary = summarize_balances(entries, [25000, 5000])

    assert summary.total_income_cents == 170000
    assert summary.total_expense_cents == 30000
    assert summary.total_balance_cents == 140000
    assert summary.checking_cents == 56000  # 40%
    assert summary.savings_cents == 84000  # 60%
    assert summary.credit_card_cents == -30000


def test_summarize_balances_split_adds_up():
    summary = summarize_balances([LedgerEntry(date(2024, 1, 1), 333, "income")], [])
    assert summary.checking_cents + summary.savings_cents == 333
    assert summary.credit_card_cents == 0


def test_monthly_balance_history(entries):
    history = monthly_balance_history(entries, TODAY, months=6)

    assert [h.month for h in history] == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]
    assert [h.balance_cents for h in history] == [50000, 50000, 50000, 150000, 120000, 140000]


def test_monthly_income_expense(entries):
    report = monthly_income_expense(entries, TODAY, months=6)

    assert [m.month for m in report.months] == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]
    by_month = {m.month: (m.income_cents, m.expense_cents) for m in report.months}
    assert by_month["2024-01"] == (100000, 0)
    assert by_month["2024-02"] == (0, 30000)
    assert by_month["2024-03"] == (20000, 0)
    assert report.total_income_cents == 120000  # June 2023 excluded
    assert report.total_expense_cents == 30000
    assert report.net_flow_cents == 90000


def test_rollups_without_transactions():
    assert [h.balance_cents for h in monthly_balance_history([], TODAY, months=3)] == [0, 0, 0]
    report = monthly_income_expense([], TODAY, months=3)
    assert report.net_flow_cents == 0
    assert len(report.months) == 3
