"""Report builders - household-scoped entry points over the engine

Every builder takes the household identifier and the reporting period
explicitly; records are expected to be already scoped to that household
and validated by ``household_ledger.ingest.schemas``.
"""

import logging
import time
from datetime import date
from typing import Iterable, Optional

from household_ledger.config import settings
from household_ledger.domain.exceptions import InvalidPeriodError
from household_ledger.domain.forecast import compare_forecast, expected_monthly_total
from household_ledger.domain.models import (
    Account,
    DateRange,
    ForecastResult,
    Income,
    PaymentAnalysis,
    PeriodSummary,
    RecurringExpense,
    SBNLReport,
    Transaction,
)
from household_ledger.domain.money import sum_amounts
from household_ledger.domain.payments import analyze_payments
from household_ledger.domain.routing import summarize_period
from household_ledger.domain.sbnl import reconcile_household
from household_ledger.infrastructure.observability.logging import log_report
from household_ledger.infrastructure.observability.metrics import (
    forecast_status_counter,
    record_report,
    sbnl_match_counter,
)
from household_ledger.utils.date_utils import format_month_year, month_range, months_in_range

logger = logging.getLogger(__name__)


def _check_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidPeriodError(f"month must be between 1 and 12, got {month}")
    if year < 1:
        raise InvalidPeriodError(f"year must be positive, got {year}")


def _finish(household_id: str, report: str, period: str, start_time: float, **fields) -> None:
    duration = time.time() - start_time
    record_report(report, duration)
    log_report(household_id, report, period, duration * 1000, **fields)


def build_period_report(
    household_id: str,
    year: int,
    month: int,
    transactions: Iterable[Transaction],
    incomes: Iterable[Income],
) -> PeriodSummary:
    """
    Monthly money-routing summary.

    Flow:
    1. Resolve the month's inclusive date range
    2. Total income, expenses and payment methods
    3. Route split amounts by type/target and total taxes
    """
    start_time = time.time()
    _check_month(year, month)

    summary = summarize_period(household_id, month_range(year, month), transactions, incomes)

    _finish(
        household_id,
        "period",
        format_month_year(year, month),
        start_time,
        transaction_count=summary.transaction_count,
        income_count=summary.income_count,
    )
    return summary


def build_forecast_report(
    household_id: str,
    year: int,
    month: int,
    recurring_expenses: Iterable[RecurringExpense],
    transactions: Iterable[Transaction],
    accounts: Optional[Iterable[Account]] = None,
    tolerance: Optional[float] = None,
) -> ForecastResult:
    """
    Compare the static recurring budget with the month's actual spending.

    When accounts are given, only spending on credit card accounts counts as
    actual; otherwise every transaction in the month does. Tolerance falls
    back to ``settings.forecast_tolerance``.
    """
    start_time = time.time()
    _check_month(year, month)
    if tolerance is None:
        tolerance = settings.forecast_tolerance

    period = month_range(year, month)
    in_month = [t for t in transactions if period.contains(t.date)]
    if accounts is not None:
        card_ids = {a.account_id for a in accounts if a.type == "credit_card"}
        in_month = [t for t in in_month if t.account_id in card_ids]

    expected = expected_monthly_total(recurring_expenses, year, month)
    actual = sum_amounts(t.amount for t in in_month)
    result = compare_forecast(expected, actual, tolerance)

    forecast_status_counter.labels(status=result.status).inc()
    _finish(household_id, "forecast", format_month_year(year, month), start_time, status=result.status)
    return result


def build_untracked_report(
    household_id: str,
    year: int,
    month: int,
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    account_id: Optional[str] = None,
) -> SBNLReport:
    """Spent-but-not-listed report for the household's credit cards, or one card"""
    start_time = time.time()
    _check_month(year, month)

    accounts = [a for a in accounts if account_id is None or a.account_id == account_id]
    report = reconcile_household(accounts, transactions, year, month)

    for result in report.accounts:
        sbnl_match_counter.labels(method=result.match_method).inc()
        if result.match_method == "description":
            logger.info(
                "Payments matched by description",
                extra={"household_id": household_id, "account_id": result.account_id},
            )

    _finish(
        household_id,
        "untracked",
        format_month_year(year, month),
        start_time,
        credit_accounts=len(report.accounts),
    )
    return report


def build_payment_report(
    household_id: str,
    start: date,
    end: date,
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
) -> PaymentAnalysis:
    """Debt payments over an inclusive date range"""
    start_time = time.time()
    if start > end:
        raise InvalidPeriodError(f"range start {start} is after end {end}")

    period = DateRange(start, end)
    in_range = [t for t in transactions if period.contains(t.date)]
    months = len(months_in_range(start.year, start.month, end.year, end.month))
    total_expenses = sum_amounts(t.amount for t in in_range)

    analysis = analyze_payments(in_range, accounts, total_expenses, months)

    _finish(
        household_id,
        "payments",
        f"{start.isoformat()}..{end.isoformat()}",
        start_time,
        payment_count=analysis.payment_count,
    )
    return analysis
