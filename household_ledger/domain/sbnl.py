"""Spent-but-not-listed (SBNL) reconciliation for credit accounts

SBNL compares what was tracked on a credit card in month N with what was
paid toward that card in month N+1. A positive gap is spending that never
made it into the ledger; a negative gap means payments fell short of tracked
charges, which is a data-quality signal rather than an error.

Payments are identified by the explicit paying-account link when the ledger
has one for the account. Otherwise a case-insensitive match of the account
name inside the transaction description is used, skipping transactions
linked to some other account. That fallback is a known weak proxy (a card
named "Visa" matches any description containing "visa") and is reported
as such through ``SBNLResult.match_method``.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Sequence

from household_ledger.domain.models import Account, SBNLInsight, SBNLReport, SBNLResult, SBNLTrend, Transaction
from household_ledger.domain.money import HUNDRED, ZERO, format_currency, round_amount, sum_amounts, to_decimal
from household_ledger.utils.date_utils import month_range, next_month

logger = logging.getLogger(__name__)

TREND_BAND = Decimal("0.1")

# Insight thresholds
HIGH_SHARE_OF_PAYMENT = Decimal("0.25")
UNTRACKED_PERCENT_WARNING = 20
NEGLIGIBLE_SBNL = Decimal("10")


def _rounded_percentage(part: Decimal, whole: Decimal) -> int:
    if whole <= 0:
        return 0
    return int((part / whole * HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_sbnl(estimated_payment: Any, tracked_expenses: Any) -> Dict[str, Any]:
    """
    SBNL amount and whole-number percentage of the payment.

    Example:
        payment $800, tracked $500 -> 300, 38%
    """
    payment = to_decimal(estimated_payment)
    sbnl = payment - to_decimal(tracked_expenses)
    return {"spent_but_not_listed": sbnl, "percentage": _rounded_percentage(sbnl, payment)}


def find_payments(account: Account, candidates: Iterable[Transaction]) -> tuple[List[Transaction], str]:
    """
    Select the transactions that pay down ``account``.

    Returns the payments and the method used: "linked", "description" or
    "none".
    """
    candidates = list(candidates)
    linked = [t for t in candidates if t.paying_account_id == account.account_id]
    if linked:
        return linked, "linked"

    name = account.name.strip().lower()
    if name:
        by_description = [
            t for t in candidates
            if t.paying_account_id is None
            and t.account_id != account.account_id
            and name in (t.description or "").lower()
        ]
        if by_description:
            return by_description, "description"
    return [], "none"


def reconcile_account(
    account: Account,
    transactions: Sequence[Transaction],
    year: int,
    month: int,
) -> SBNLResult:
    """Tracked charges in (year, month) vs payments found in the following month"""
    period = month_range(year, month)
    payment_period = month_range(*next_month(year, month))

    tracked_txns = [
        t for t in transactions
        if t.account_id == account.account_id and period.contains(t.date)
    ]
    payments, match_method = find_payments(
        account, (t for t in transactions if payment_period.contains(t.date))
    )

    tracked = sum_amounts(t.amount for t in tracked_txns)
    estimated = sum_amounts(t.amount for t in payments)
    result = calculate_sbnl(estimated, tracked)

    logger.debug(
        "Reconciled account",
        extra={"account_id": account.account_id, "match_method": match_method, "payments": len(payments)},
    )

    return SBNLResult(
        account_id=account.account_id,
        account_name=account.name,
        tracked_expenses=tracked,
        estimated_payment=estimated,
        spent_but_not_listed=result["spent_but_not_listed"],
        percentage=result["percentage"],
        transaction_count=len(tracked_txns),
        match_method=match_method,
    )


def reconcile_household(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> SBNLReport:
    """SBNL for every credit card account plus household totals"""
    transactions = list(transactions)
    results = [
        reconcile_account(account, transactions, year, month)
        for account in accounts
        if account.type == "credit_card"
    ]

    total_tracked = sum_amounts(r.tracked_expenses for r in results)
    total_payments = sum_amounts(r.estimated_payment for r in results)
    total_sbnl = total_payments - total_tracked

    return SBNLReport(
        year=year,
        month=month,
        accounts=results,
        total_tracked=total_tracked,
        total_payments=total_payments,
        total_spent_but_not_listed=total_sbnl,
        percentage=_rounded_percentage(total_sbnl, total_payments),
    )


def describe_sbnl(result: SBNLResult) -> str:
    """Tiered display message for one account's SBNL"""
    sbnl = result.spent_but_not_listed
    pct = result.percentage
    if sbnl <= 0:
        return f"All spending accounted for (tracked {format_currency(abs(sbnl))} over payment)"
    if pct < 5:
        return f"Great tracking! Only {format_currency(sbnl)} ({pct}%) untracked"
    if pct < 15:
        return f"Good tracking. {format_currency(sbnl)} ({pct}%) in untracked spending"
    if pct < 25:
        return f"Note: {format_currency(sbnl)} ({pct}%) untracked - might want to review spending"
    return f"Significant untracked spending: {format_currency(sbnl)} ({pct}%) of the payment"


def analyze_sbnl_trend(monthly_sbnl: Sequence[Any]) -> SBNLTrend:
    """
    Summarize SBNL amounts ordered oldest to newest.

    The trend compares the average of the last three months with the first
    three; a move of more than 10% either way counts as a trend.
    """
    amounts = [to_decimal(value) for value in monthly_sbnl]
    if not amounts:
        return SBNLTrend(average=ZERO, trend="insufficient_data", highest=None, lowest=None, volatility=ZERO)

    average = round_amount(sum_amounts(amounts) / len(amounts))
    highest = max(amounts)
    lowest = min(amounts)

    trend = "stable"
    if len(amounts) >= 2:
        recent = amounts[-3:]
        older = amounts[:3]
        recent_avg = sum_amounts(recent) / len(recent)
        older_avg = sum_amounts(older) / len(older)
        if recent_avg > older_avg * (1 + TREND_BAND):
            trend = "increasing"
        elif recent_avg < older_avg * (1 - TREND_BAND):
            trend = "decreasing"

    return SBNLTrend(
        average=average,
        trend=trend,
        highest=highest,
        lowest=lowest,
        volatility=highest - lowest,
    )


def generate_sbnl_insights(
    spent_but_not_listed: Any,
    percentage: int,
    monthly_payment: Any,
    trend: str | None = None,
) -> List[SBNLInsight]:
    """
    Severity-tagged hints for an SBNL figure.

    Rules (each independent, in this order):
    - high: SBNL above 25% of the monthly payment
    - medium: percentage above 20
    - low: SBNL positive but under $10
    - medium: trend is "increasing"
    """
    sbnl = to_decimal(spent_but_not_listed)
    payment = to_decimal(monthly_payment)
    insights: List[SBNLInsight] = []

    if sbnl > payment * HIGH_SHARE_OF_PAYMENT:
        insights.append(SBNLInsight(
            "high",
            "Over 25% of the card payment went to untracked items. "
            "Look for missing expense categories or cash spending.",
        ))

    if percentage > UNTRACKED_PERCENT_WARNING:
        insights.append(SBNLInsight(
            "medium",
            f"{percentage}% of card spending is not tracked. Consider reviewing your expense categories.",
        ))

    if 0 < sbnl < NEGLIGIBLE_SBNL:
        insights.append(SBNLInsight("low", "Excellent tracking! Very little untracked spending."))

    if trend == "increasing":
        insights.append(SBNLInsight(
            "medium",
            "Untracked spending is trending upward over recent months.",
        ))

    return insights
