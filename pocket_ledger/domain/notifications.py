"""Upcoming-payment window for the notification bell"""

from datetime import date
from typing import Iterable, List

from pocket_ledger.domain.models import UpcomingPayment
from pocket_ledger.utils.date_utils import window_end

DEFAULT_WINDOW_DAYS = 7

_KIND_ORDER = {"bill": 0, "statement": 1}


def statement_title(month: str) -> str:
    return f"Card payment ({month})"


def collect_upcoming_payments(
    bills: Iterable,
    statements: Iterable,
    today: date,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> List[UpcomingPayment]:
    """
    Merge bills and unpaid statements due between today and today + window_days (inclusive).

    Bills are included whether or not they are paid; statements only while unpaid.
    Accepts any objects exposing the ORM attribute names (id, name / month, due_date,
    amount_cents / statement_balance_cents, is_paid).

    Returns:
        Payments sorted by due date, bills before statements on the same day
    """
    last_day = window_end(today, window_days)
    upcoming: List[UpcomingPayment] = []

    for bill in bills:
        if today <= bill.due_date <= last_day:
            upcoming.append(
                UpcomingPayment(
                    id=str(bill.id),
                    name=bill.name,
                    due_date=bill.due_date,
                    kind="bill",
                    amount_cents=bill.amount_cents,
                )
            )

    for statement in statements:
        if statement.is_paid:
            continue
        if today <= statement.due_date <= last_day:
            upcoming.append(
                UpcomingPayment(
                    id=str(statement.id),
                    name=statement_title(statement.month),
                    due_date=statement.due_date,
                    kind="statement",
                    amount_cents=statement.statement_balance_cents,
                )
            )

    upcoming.sort(key=lambda p: (p.due_date, _KIND_ORDER[p.kind], p.name))
    return upcoming
