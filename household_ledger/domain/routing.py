"""Split resolution and money-routing aggregation"""

from decimal import Decimal
from typing import Dict, Iterable, List

from household_ledger.domain.models import (
    DateRange,
    FixedAmount,
    Income,
    PercentOfParent,
    PeriodSummary,
    RoutingSummary,
    Split,
    Transaction,
)
from household_ledger.domain.money import ZERO, amount_from_percent, sum_amounts, to_decimal


def resolve_split_amount(split: Split, parent_amount: Decimal) -> Decimal:
    """
    Concrete amount of a split.

    A fixed amount is authoritative; a percentage resolves against the parent
    amount; a split with neither contributes 0.
    """
    allocation = split.allocation
    if isinstance(allocation, FixedAmount):
        return to_decimal(allocation.value)
    if isinstance(allocation, PercentOfParent):
        return amount_from_percent(allocation.value, parent_amount)
    return ZERO


def build_routing_summary(transactions: Iterable[Transaction]) -> RoutingSummary:
    """Sum resolved split amounts by routing type, then by target"""
    summary: RoutingSummary = {}
    for txn in transactions:
        for split in txn.splits:
            targets = summary.setdefault(split.type, {})
            targets[split.target] = targets.get(split.target, ZERO) + resolve_split_amount(split, txn.amount)
    return summary


def calculate_tax_total(incomes: Iterable[Income], transactions: Iterable[Transaction]) -> Decimal:
    """Income taxes withheld plus every split routed to "tax" """
    income_taxes = sum_amounts(income.taxes for income in incomes)
    tax_splits = sum_amounts(
        resolve_split_amount(split, txn.amount)
        for txn in transactions
        for split in txn.splits
        if split.type == "tax"
    )
    return income_taxes + tax_splits


def summarize_by_method(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Total transaction amount per payment method, independent of splits"""
    by_method: Dict[str, Decimal] = {}
    for txn in transactions:
        by_method[txn.method] = by_method.get(txn.method, ZERO) + to_decimal(txn.amount)
    return by_method


def summarize_period(
    household_id: str,
    period: DateRange,
    transactions: Iterable[Transaction],
    incomes: Iterable[Income],
) -> PeriodSummary:
    """
    Build the routing summary for one household and reporting period.

    Only records dated inside ``period`` (inclusive) are counted. Income totals
    use the gross amount; taxes withheld are reported through tax_total.
    """
    in_period: List[Transaction] = [t for t in transactions if period.contains(t.date)]
    period_incomes: List[Income] = [i for i in incomes if period.contains(i.date)]

    return PeriodSummary(
        household_id=household_id,
        period=period,
        total_income=sum_amounts(i.gross_amount for i in period_incomes),
        total_expense=sum_amounts(t.amount for t in in_period),
        tax_total=calculate_tax_total(period_incomes, in_period),
        by_method=summarize_by_method(in_period),
        routing_summary=build_routing_summary(in_period),
        transaction_count=len(in_period),
        income_count=len(period_incomes),
    )
