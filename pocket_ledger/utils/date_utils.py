"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta


def end_of_month(day: date) -> date:
    """Last calendar day of the month containing `day`"""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def add_months(from_date: date, months: int) -> date:
    """Shift by calendar months, clamping to the last valid day (Jan 31 + 1 → Feb 28/29)"""
    return from_date + relativedelta(months=months)


def month_key(day: date) -> str:
    """YYYY-MM key used by statements and reports"""
    return day.strftime("%Y-%m")


def last_n_month_starts(today: date, months: int) -> List[date]:
    """First day of each of the last `months` months, oldest first, ending with today's month"""
    current = start_of_month(today)
    return [add_months(current, -offset) for offset in range(months - 1, -1, -1)]


def window_end(today: date, days: int) -> date:
    return today + timedelta(days=days)


def filter_bounds(
    filter_type: str,
    today: date,
    on: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """
    Inclusive (start, end) date bounds of a transaction list filter.

    all / recent: unbounded
    today:        today only
    month:        current calendar month
    date:         the single day `on` (unbounded when omitted)
    range:        start..end, either side optional
    """
    if filter_type == "today":
        return today, today
    if filter_type == "month":
        return start_of_month(today), end_of_month(today)
    if filter_type == "date":
        return on, on
    if filter_type == "range":
        return start, end
    return None, None
