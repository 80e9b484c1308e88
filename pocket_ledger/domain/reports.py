"""Dashboard and report rollups over a user's transactions"""

from datetime import date
from typing import Dict, Iterable, List

from pocket_ledger.domain.models import (
    BalanceSummary,
    FlowReport,
    LedgerEntry,
    MonthlyBalance,
    MonthlyFlow,
)
from pocket_ledger.utils.date_utils import last_n_month_starts, month_key

# Share of the running balance shown as checking; the rest is savings
CHECKING_SHARE = 0.4


def summarize_balances(entries: Iterable[LedgerEntry], card_debts_cents: Iterable[int]) -> BalanceSummary:
    """
    Headline dashboard figures.

    Balance is all-time income minus expense, split 40/60 into checking and
    savings. Credit card debt is reported as a negative balance.
    """
    entries = list(entries)
    total_income = sum(e.amount_cents for e in entries if e.type == "income")
    total_expense = sum(e.amount_cents for e in entries if e.type == "expense")
    total_balance = total_income - total_expense

    checking = round(total_balance * CHECKING_SHARE)

    return BalanceSummary(
        total_income_cents=total_income,
        total_expense_cents=total_expense,
        total_balance_cents=total_balance,
        checking_cents=checking,
        savings_cents=total_balance - checking,
        credit_card_cents=-sum(card_debts_cents),
    )


def _net_by_month(entries: Iterable[LedgerEntry]) -> Dict[str, int]:
    net: Dict[str, int] = {}
    for e in entries:
        key = month_key(e.date)
        signed = e.amount_cents if e.type == "income" else -e.amount_cents
        net[key] = net.get(key, 0) + signed
    return net


def monthly_balance_history(entries: Iterable[LedgerEntry], today: date, months: int = 6) -> List[MonthlyBalance]:
    """
    Closing balance of each of the last `months` months, oldest first.

    Walks back from the current all-time balance, removing each month's net flow.
    """
    entries = list(entries)
    net = _net_by_month(entries)
    balance = sum(net.values())

    history: List[MonthlyBalance] = []
    for month_start in reversed(last_n_month_starts(today, months)):
        key = month_key(month_start)
        history.append(MonthlyBalance(month=key, balance_cents=balance))
        balance -= net.get(key, 0)

    history.reverse()
    return history


def monthly_income_expense(entries: Iterable[LedgerEntry], today: date, months: int = 6) -> FlowReport:
    """Income and expense per month over the last `months` months; older entries are ignored"""
    buckets = {month_key(m): MonthlyFlow(month=month_key(m)) for m in last_n_month_starts(today, months)}
    report = FlowReport(months=list(buckets.values()))

    for e in entries:
        bucket = buckets.get(month_key(e.date))
        if bucket is None:
            continue
        if e.type == "income":
            bucket.income_cents += e.amount_cents
            report.total_income_cents += e.amount_cents
        else:
            bucket.expense_cents += e.amount_cents
            report.total_expense_cents += e.amount_cents

    return report
