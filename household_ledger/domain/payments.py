"""Debt payments and account balance analysis"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable

from household_ledger.domain.models import (
    ASSET_ACCOUNT_TYPES,
    DEBT_ACCOUNT_TYPES,
    Account,
    AccountPayments,
    CreditUtilization,
    NetWorth,
    PaymentAnalysis,
    Transaction,
)
from household_ledger.domain.money import HUNDRED, ZERO, to_decimal

# Utilization bands (percent of limit)
HEALTHY_UTILIZATION = 30
DANGER_UTILIZATION = 70


def analyze_payments(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    total_expenses: Any,
    months: int,
) -> PaymentAnalysis:
    """
    Summarize payments toward credit cards and loans.

    Only transactions whose paying_account_id names a known credit_card or
    loan account count as payments.

    - debt_reduction_rate: debt payments as a percent of total expenses
    - payment_velocity: payments per month over ``months``
    """
    debt_accounts = {a.account_id: a for a in accounts if a.type in DEBT_ACCOUNT_TYPES}

    credit_card_total = ZERO
    loan_total = ZERO
    payment_count = 0
    by_account: Dict[str, AccountPayments] = {}

    for txn in transactions:
        account = debt_accounts.get(txn.paying_account_id) if txn.paying_account_id else None
        if account is None:
            continue

        amount = to_decimal(txn.amount)
        if account.type == "credit_card":
            credit_card_total += amount
        else:
            loan_total += amount
        payment_count += 1

        entry = by_account.setdefault(
            account.account_id, AccountPayments(account_name=account.name, amount=ZERO, count=0)
        )
        entry.amount += amount
        entry.count += 1

    debt_total = credit_card_total + loan_total
    expenses = to_decimal(total_expenses)

    return PaymentAnalysis(
        total_credit_card_payments=credit_card_total,
        total_loan_payments=loan_total,
        total_debt_payments=debt_total,
        payment_count=payment_count,
        avg_payment_amount=debt_total / payment_count if payment_count else ZERO,
        debt_reduction_rate=debt_total / expenses * HUNDRED if expenses > 0 else ZERO,
        payment_velocity=Decimal(payment_count) / months if months > 0 else ZERO,
        payments_by_account=by_account,
    )


def credit_utilization(current_balance: Any, credit_limit: Any) -> CreditUtilization:
    """
    Utilization of a credit card limit.

    Status bands: healthy <= 30%, warning < 70%, danger otherwise.
    A missing or non-positive limit reports 0% and healthy.
    """
    balance = to_decimal(current_balance)
    limit = to_decimal(credit_limit)
    if limit <= 0:
        return CreditUtilization(
            current_balance=balance,
            credit_limit=ZERO,
            utilization_percent=0,
            available_credit=ZERO,
            status="healthy",
        )

    percent = int((balance / limit * HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if percent <= HEALTHY_UTILIZATION:
        status = "healthy"
    elif percent < DANGER_UTILIZATION:
        status = "warning"
    else:
        status = "danger"

    return CreditUtilization(
        current_balance=balance,
        credit_limit=limit,
        utilization_percent=percent,
        available_credit=max(ZERO, limit - balance),
        status=status,
    )


def calculate_net_worth(accounts: Iterable[Account]) -> NetWorth:
    """
    Net worth from the current balances of active accounts.

    checking, savings, cash and investment balances are assets; loan
    balances are liabilities, as are credit card balances above zero (a
    card in credit is not an asset). Other account types are ignored.
    Distributions are keyed by account name, so two accounts sharing a name
    keep only the last balance.
    """
    assets = ZERO
    liabilities = ZERO
    asset_distribution: Dict[str, Decimal] = {}
    liability_distribution: Dict[str, Decimal] = {}

    for account in accounts:
        if not account.is_active:
            continue
        balance = to_decimal(account.current_balance)

        if account.type in ASSET_ACCOUNT_TYPES:
            assets += balance
            asset_distribution[account.name] = balance
        elif account.type == "loan" or (account.type == "credit_card" and balance > 0):
            liabilities += balance
            liability_distribution[account.name] = balance

    return NetWorth(
        assets=assets,
        liabilities=liabilities,
        net_worth=assets - liabilities,
        asset_distribution=asset_distribution,
        liability_distribution=liability_distribution,
    )
