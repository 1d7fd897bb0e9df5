"""Recurring expense schedule projection"""

import logging
from datetime import date, timedelta
from typing import Iterable, List

from household_ledger.config import settings
from household_ledger.domain.models import RecurringExpense
from household_ledger.utils.date_utils import add_months, days_in_month, month_range

logger = logging.getLogger(__name__)


def _anchored(year: int, month: int, due_day: int) -> date:
    """due_day in the given month, clamped to the month's last day"""
    return date(year, month, min(due_day, days_in_month(year, month)))


def calculate_next_due_date(
    frequency: str,
    due_day: int | None = None,
    now: date | None = None,
) -> date:
    """
    Compute the next due date for a recurring expense.

    Rules:
    - daily: now + 1 day
    - weekly: now + 7 days
    - monthly, no due_day: same day next month
    - monthly, due_day: due_day this month, or next month if that is not
      strictly after now
    - yearly: same month/day next year
    - anything else: treated as monthly without due_day

    Due days past the end of a month clamp to the month's last day
    (due_day=31 in April -> April 30, Feb 29 + 1 year -> Feb 28).
    """
    if now is None:
        now = date.today()

    if frequency == "daily":
        return now + timedelta(days=1)

    if frequency == "weekly":
        return now + timedelta(days=7)

    if frequency == "yearly":
        return add_months(now, 12)

    if frequency == "monthly":
        if due_day:
            candidate = _anchored(now.year, now.month, due_day)
            if candidate <= now:
                following = add_months(date(now.year, now.month, 1), 1)
                candidate = _anchored(following.year, following.month, due_day)
            return candidate
        return add_months(now, 1)

    logger.warning("Unknown frequency %r, falling back to monthly", frequency)
    return add_months(now, 1)


def expenses_due_in_month(
    expenses: Iterable[RecurringExpense], year: int, month: int
) -> List[RecurringExpense]:
    """Active expenses whose next due date falls inside the given month"""
    period = month_range(year, month)
    return [e for e in expenses if e.is_active and period.contains(e.next_due_date)]


def project_due_dates(expense: RecurringExpense, until: date) -> List[date]:
    """
    List successive due dates from the expense's next due date up to and
    including ``until``.

    Each step re-applies calculate_next_due_date to the previous due date, so
    the projection is reproducible from the definition alone.
    """
    if not expense.is_active:
        return []

    due_dates = []
    current = expense.next_due_date
    for _ in range(settings.max_projection_steps):
        if current > until:
            break
        due_dates.append(current)
        current = calculate_next_due_date(expense.frequency, expense.due_day, now=current)
    return due_dates
