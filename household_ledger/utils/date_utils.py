"""Date manipulation utilities

All dates here are local calendar days. Date-only strings are never routed
through a timezone-aware parser, so "2025-11-13" is always November 13th
no matter what offset the process runs under.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Tuple

from household_ledger.domain.models import DateRange

# Date-only prefix of an ISO date or timestamp; time and zone are discarded
_ISO_DATE_PREFIX = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:$|[T\s])")
_MONTH_YEAR_KEY = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_range(year: int, month: int) -> DateRange:
    """First and last calendar day of a 1-indexed month"""
    return DateRange(date(year, month, 1), date(year, month, days_in_month(year, month)))


def year_range(year: int) -> DateRange:
    """January 1 through December 31"""
    return DateRange(date(year, 1, 1), date(year, 12, 31))


def next_month(year: int, month: int) -> Tuple[int, int]:
    return (year + 1, 1) if month == 12 else (year, month + 1)


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day to the end of the target month"""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def parse_local_date(value: Any) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string (or the date portion of an ISO timestamp) as a
    local calendar date.

    "2025-11-01T00:00:00.000Z" -> date(2025, 11, 1), never October 31st.
    Returns None for anything that is not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    match = _ISO_DATE_PREFIX.match(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def months_in_range(
    start_year: int, start_month: int, end_year: int, end_month: int
) -> List[Tuple[int, int]]:
    """Every (year, month) pair from start to end inclusive, chronologically"""
    months = []
    year, month = start_year, start_month
    while (year, month) <= (end_year, end_month):
        months.append((year, month))
        year, month = next_month(year, month)
    return months


def is_within_range(day: date, start: date, end: date) -> bool:
    """Inclusive on both ends"""
    return start <= day <= end


def format_month_year(year: int, month: int) -> str:
    """Month key in YYYY-MM form"""
    return f"{year:04d}-{month:02d}"


def parse_month_year_key(key: Any) -> Optional[Tuple[int, int]]:
    """Parse a YYYY-MM key; malformed keys and months outside 1-12 give None"""
    if not isinstance(key, str):
        return None
    match = _MONTH_YEAR_KEY.match(key)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if year < 1 or not 1 <= month <= 12:
        return None
    return year, month


def format_month_name(year: int, month: int) -> str:
    """Display label such as "January 2024" """
    return f"{calendar.month_name[month]} {year}"


def generate_date_range(start: date, end: date) -> List[date]:
    """Every calendar day from start to end inclusive; empty when end < start"""
    span = (end - start).days
    return [start + timedelta(days=offset) for offset in range(span + 1)]
