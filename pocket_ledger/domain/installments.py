"""Installment schedule generation for loan repayment"""

from datetime import date, timedelta
from typing import List, Optional, Sequence

from pocket_ledger.domain.exceptions import InvalidScheduleError
from pocket_ledger.domain.models import BillDraft, Frequency, ScheduledInstallment
from pocket_ledger.utils.date_utils import add_months, end_of_month, start_of_month

BIWEEKLY_INTERVAL_DAYS = 14
SEMI_MONTHLY_MID_DAY = 15


def split_evenly(total_cents: int, installments: int) -> List[int]:
    """
    Divide a total into equal installments.

    Last installment absorbs the rounding remainder so the sum is exact:
        10000 cents / 3 → [3333, 3333, 3334]
    """
    base_amount = total_cents // installments
    remainder = total_cents % installments
    return [
        base_amount + (remainder if i == installments - 1 else 0)
        for i in range(installments)
    ]


def pad_amounts(amounts_cents: Sequence[int], installments: int) -> List[int]:
    """Explicit per-installment amounts; missing entries default to 0, extras are dropped"""
    amounts = list(amounts_cents[:installments])
    return amounts + [0] * (installments - len(amounts))


def next_semi_monthly(current: date) -> date:
    """Snap to the 15th, then to month end, then to the 15th of the next month"""
    if current.day < SEMI_MONTHLY_MID_DAY:
        return current.replace(day=SEMI_MONTHLY_MID_DAY)
    month_end = end_of_month(current)
    if current < month_end:
        return month_end
    return add_months(start_of_month(current), 1).replace(day=SEMI_MONTHLY_MID_DAY)


def generate_due_dates(installments: int, frequency: Frequency, start_date: date) -> List[date]:
    """Strictly increasing due dates, the first one on start_date"""
    frequency = Frequency(frequency)

    if frequency is Frequency.MONTHLY:
        # Anchored on start_date so a clamped month does not drag later dates back
        return [add_months(start_date, i) for i in range(installments)]

    if frequency is Frequency.BIWEEKLY:
        return [start_date + timedelta(days=i * BIWEEKLY_INTERVAL_DAYS) for i in range(installments)]

    due_dates = [start_date]
    while len(due_dates) < installments:
        due_dates.append(next_semi_monthly(due_dates[-1]))
    return due_dates


def generate_installment_schedule(
    installments: int,
    frequency: Frequency,
    start_date: date,
    total_cents: Optional[int] = None,
    amounts_cents: Optional[Sequence[int]] = None,
) -> List[ScheduledInstallment]:
    """
    Generate the repayment schedule of a loan.

    Args:
        installments: Number of payments (must be positive)
        frequency: monthly, bi-weekly (every 14 days) or semi-monthly (15th / month end)
        start_date: Due date of installment 1
        total_cents: Total to split evenly; ignored when amounts_cents is given
        amounts_cents: Explicit amount per installment, padded with zeros

    Returns:
        Installments numbered 1..N with strictly increasing due dates

    Example:
        3 monthly installments of 30000 from 2024-03-01 →
        (1, 2024-03-01, 10000), (2, 2024-04-01, 10000), (3, 2024-05-01, 10000)
    """
    if installments <= 0:
        raise InvalidScheduleError(f"Installment count must be positive, got {installments}")

    try:
        due_dates = generate_due_dates(installments, frequency, start_date)
    except ValueError as e:
        raise InvalidScheduleError(f"Unsupported frequency: {frequency}") from e

    if amounts_cents is not None:
        amounts = pad_amounts(amounts_cents, installments)
    elif total_cents is not None:
        amounts = split_evenly(total_cents, installments)
    else:
        raise InvalidScheduleError("Either total_cents or amounts_cents is required")

    return [
        ScheduledInstallment(installment_number=i + 1, due_date=due_date, amount_cents=amount)
        for i, (due_date, amount) in enumerate(zip(due_dates, amounts))
    ]


def build_loan_bills(
    user_id: str,
    loan_id: str,
    schedule: List[ScheduledInstallment],
) -> List[BillDraft]:
    """One bill per installment, tagged with the loan id and installment number"""
    count = len(schedule)
    return [
        BillDraft(
            user_id=user_id,
            name=f"Installment {inst.installment_number}/{count} - Loan {loan_id}",
            amount_cents=inst.amount_cents,
            due_date=inst.due_date,
            loan_id=loan_id,
            installment_number=inst.installment_number,
        )
        for inst in schedule
    ]
