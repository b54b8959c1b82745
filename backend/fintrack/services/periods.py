# fintrack/services/periods.py
"""Calendar window helpers used by listing filters and the reports.

A window is an inclusive ``(start, end)`` pair of dates: every transaction
dated on ``start``, on ``end`` or between them falls inside it.
"""
import calendar
from datetime import date
from typing import List, Optional, Tuple

Window = Tuple[date, date]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_window(year: int, month: int) -> Window:
    """First and last day of a calendar month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def year_window(year: int) -> Window:
    return date(year, 1, 1), date(year, 12, 31)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by ``delta`` months, crossing year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months(today: date, count: int) -> List[Tuple[int, int]]:
    """The ``count`` consecutive (year, month) keys ending with today's month, oldest first."""
    return [shift_month(today.year, today.month, -offset) for offset in range(count - 1, -1, -1)]


def month_name(month: int) -> str:
    return calendar.month_name[month]


def month_label(year: int, month: int, short: bool = False) -> str:
    """'March 2024' (or 'Mar 2024' with ``short``)."""
    names = calendar.month_abbr if short else calendar.month_name
    return f"{names[month]} {year}"


def resolve_month(month: Optional[int], year: Optional[int], today: date) -> Tuple[int, int]:
    """Fill a missing month and/or year from today's date."""
    return (month or today.month), (year or today.year)
