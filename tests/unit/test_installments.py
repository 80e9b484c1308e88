"""Unit tests for installment schedule generation"""

import pytest
from datetime import date, timedelta
from pocket_ledger.domain.installments import (
    build_loan_bills,
    generate_installment_schedule,
    next_semi_monthly,
    split_evenly,
)
from pocket_ledger.domain.exceptions import InvalidScheduleError
from pocket_ledger.domain.models import Frequency


def test_monthly_schedule_even_split():
    """3 monthly installments of a $300 loan starting 2024-03-01"""
    schedule = generate_installment_schedule(
        installments=3,
        frequency=Frequency.MONTHLY,
        start_date=date(2024, 3, 1),
        total_cents=30000,
    )

    assert [inst.installment_number for inst in schedule] == [1, 2, 3]
    assert [inst.due_date for inst in schedule] == [
        date(2024, 3, 1),
        date(2024, 4, 1),
        date(2024, 5, 1),
    ]
    assert all(inst.amount_cents == 10000 for inst in schedule)


def test_monthly_schedule_clamps_month_end():
    """Day 31 clamps to the last day of shorter months, then returns to 31"""
    schedule = generate_installment_schedule(
        installments=3,
        frequency=Frequency.MONTHLY,
        start_date=date(2024, 1, 31),
        total_cents=30000,
    )

    assert [inst.due_date for inst in schedule] == [
        date(2024, 1, 31),
        date(2024, 2, 29),  # Leap year
        date(2024, 3, 31),
    ]


def test_monthly_schedule_non_leap_february():
    schedule = generate_installment_schedule(2, Frequency.MONTHLY, date(2023, 1, 30), total_cents=200)
    assert schedule[1].due_date == date(2023, 2, 28)


def test_even_split_remainder_goes_to_last_installment():
    schedule = generate_installment_schedule(3, Frequency.MONTHLY, date(2024, 3, 1), total_cents=10000)

    assert [inst.amount_cents for inst in schedule] == [3333, 3333, 3334]
    assert sum(inst.amount_cents for inst in schedule) == 10000


def test_split_evenly_exact_total():
    amounts = split_evenly(40003, 4)
    assert amounts == [10000, 10000, 10000, 10003]
    assert sum(amounts) == 40003


def test_explicit_amounts_used_as_given():
    amounts = [5000, 7000, 9000]
    schedule = generate_installment_schedule(
        3, Frequency.MONTHLY, date(2024, 3, 1), amounts_cents=amounts
    )
    assert [inst.amount_cents for inst in schedule] == amounts


def test_explicit_amounts_shorter_than_count_default_to_zero():
    schedule = generate_installment_schedule(
        4, Frequency.MONTHLY, date(2024, 3, 1), amounts_cents=[5000, 6000]
    )
    assert [inst.amount_cents for inst in schedule] == [5000, 6000, 0, 0]


def test_explicit_amounts_take_precedence_over_total():
    schedule = generate_installment_schedule(
        2, Frequency.MONTHLY, date(2024, 3, 1), total_cents=99999, amounts_cents=[100, 200]
    )
    assert [inst.amount_cents for inst in schedule] == [100, 200]


def test_biweekly_schedule_is_fourteen_days_apart():
    start = date(2024, 3, 1)
    schedule = generate_installment_schedule(4, Frequency.BIWEEKLY, start, total_cents=40000)

    assert [inst.due_date for inst in schedule] == [start + timedelta(days=14 * i) for i in range(4)]


def test_frequency_accepts_plain_string():
    schedule = generate_installment_schedule(2, "bi-weekly", date(2024, 3, 1), total_cents=200)
    assert schedule[1].due_date == date(2024, 3, 15)


def test_semi_monthly_snaps_to_fifteenth_and_month_end():
    schedule = generate_installment_schedule(
        6, Frequency.SEMI_MONTHLY, date(2024, 1, 10), total_cents=60000
    )

    assert [inst.due_date for inst in schedule] == [
        date(2024, 1, 10),
        date(2024, 1, 15),
        date(2024, 1, 31),
        date(2024, 2, 15),
        date(2024, 2, 29),
        date(2024, 3, 15),
    ]


def test_next_semi_monthly_from_fifteenth_goes_to_month_end():
    assert next_semi_monthly(date(2024, 4, 15)) == date(2024, 4, 30)
    assert next_semi_monthly(date(2024, 4, 20)) == date(2024, 4, 30)
    assert next_semi_monthly(date(2024, 12, 31)) == date(2025, 1, 15)


@pytest.mark.parametrize("frequency", list(Frequency))
@pytest.mark.parametrize("start", [date(2024, 1, 31), date(2024, 2, 15), date(2023, 12, 1)])
def test_schedule_invariants(frequency: Frequency, start: date):
    """Count, numbering and strictly increasing due dates for the maximum count"""
    schedule = generate_installment_schedule(24, frequency, start, total_cents=123457)

    assert len(schedule) == 24
    assert [inst.installment_number for inst in schedule] == list(range(1, 25))
    assert schedule[0].due_date == start
    assert all(a.due_date < b.due_date for a, b in zip(schedule, schedule[1:]))
    assert sum(inst.amount_cents for inst in schedule) == 123457


@pytest.mark.parametrize("installments", [0, -3])
def test_non_positive_installments_rejected(installments: int):
    with pytest.raises(InvalidScheduleError):
        generate_installment_schedule(installments, Frequency.MONTHLY, date(2024, 3, 1), total_cents=100)


def test_unknown_frequency_rejected():
    with pytest.raises(InvalidScheduleError):
        generate_installment_schedule(3, "weekly", date(2024, 3, 1), total_cents=300)


def test_missing_amounts_rejected():
    with pytest.raises(InvalidScheduleError):
        generate_installment_schedule(3, Frequency.MONTHLY, date(2024, 3, 1))


def test_build_loan_bills_tags_loan_and_installment():
    schedule = generate_installment_schedule(3, Frequency.MONTHLY, date(2024, 3, 1), total_cents=30000)
    bills = build_loan_bills("user_ana", "car-2024", schedule)

    assert [b.name for b in bills] == [
        "Installment 1/3 - Loan car-2024",
        "Installment 2/3 - Loan car-2024",
        "Installment 3/3 - Loan car-2024",
    ]
    assert len({(b.loan_id, b.installment_number) for b in bills}) == 3
    assert all(b.user_id == "user_ana" for b in bills)
    assert [b.due_date for b in bills] == [inst.due_date for inst in schedule]
