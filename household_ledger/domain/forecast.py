"""Recurring expense forecasting - expected monthly totals vs actual spending"""

from decimal import Decimal
from typing import Any, Iterable

from household_ledger.domain.models import ForecastResult, RecurringExpense
from household_ledger.domain.money import HUNDRED, ZERO, format_currency, sum_amounts, to_decimal

# Average occurrences per month for each frequency
MONTHLY_MULTIPLIERS = {
    "daily": Decimal(365) / Decimal(12),
    "weekly": Decimal(52) / Decimal(12),
    "monthly": Decimal(1),
    "yearly": Decimal(1) / Decimal(12),
}


def expected_monthly_total(expenses: Iterable[RecurringExpense], year: int, month: int) -> Decimal:
    """
    Static monthly budget projection: the sum of every active definition's
    amount.

    Due-date timing is ignored, so the result is identical for any
    (year, month); the arguments keep the call shape of a per-month report.
    """
    return sum_amounts(e.amount for e in expenses if e.is_active)


def monthly_equivalent(expense: RecurringExpense) -> Decimal:
    """Normalized monthly cost of one definition (inactive -> 0)"""
    if not expense.is_active:
        return ZERO
    multiplier = MONTHLY_MULTIPLIERS.get(expense.frequency, Decimal(1))
    return to_decimal(expense.amount) * multiplier


def compare_forecast(expected: Any, actual: Any, tolerance: float) -> ForecastResult:
    """
    Compare actual spending against the expected total.

    Status thresholds (tolerance is a fraction, e.g. 0.15 = 15%):
    - on-track: |percent difference| <= tolerance * 100
    - over:     percent difference >  tolerance * 100
    - under:    percent difference < -tolerance * 100

    Percent difference is 0 when nothing was expected.
    """
    expected_total = to_decimal(expected)
    actual_total = to_decimal(actual)
    difference = actual_total - expected_total
    percent_difference = difference / expected_total * HUNDRED if expected_total != 0 else ZERO

    band = to_decimal(tolerance) * HUNDRED
    if abs(percent_difference) <= band:
        status = "on-track"
    elif percent_difference > band:
        status = "over"
    else:
        status = "under"

    return ForecastResult(
        expected_total=expected_total,
        actual_total=actual_total,
        difference=difference,
        percent_difference=percent_difference,
        status=status,
    )


def describe_forecast(result: ForecastResult) -> str:
    """Short display line for a forecast status"""
    if result.status == "over":
        return f"Over by {format_currency(result.difference)}"
    if result.status == "under":
        return f"Under by {format_currency(abs(result.difference))}"
    return "On track"
