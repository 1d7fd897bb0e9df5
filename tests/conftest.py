"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal

from household_ledger.domain.models import (
    Account,
    FixedAmount,
    Income,
    PercentOfParent,
    RecurringExpense,
    Split,
    Transaction,
)


@pytest.fixture
def accounts() -> list[Account]:
    """Household with two credit cards, a checking account and a car loan"""
    return [
        Account("cc1", "Chase Sapphire", "credit_card", credit_limit=Decimal("10000"), current_balance=Decimal("2000")),
        Account("cc2", "Amex Gold", "credit_card", credit_limit=Decimal("5000"), current_balance=Decimal("1500")),
        Account("checking1", "Chase Checking", "checking", current_balance=Decimal("5000")),
        Account("loan1", "Car Loan", "loan", current_balance=Decimal("15000")),
    ]


@pytest.fixture
def november_transactions() -> list[Transaction]:
    """November charges with splits plus December card payments"""
    return [
        Transaction(
            "t1", date(2024, 11, 3), Decimal("200.00"), "cc", "cc1", "Groceries",
            splits=[
                Split("need", "food", PercentOfParent(Decimal("75"))),
                Split("want", "snacks", PercentOfParent(Decimal("25"))),
            ],
        ),
        Transaction(
            "t2", date(2024, 11, 15), Decimal("120.00"), "cc", "cc1", "Phone bill",
            splits=[Split("need", "utilities", FixedAmount(Decimal("120.00")))],
        ),
        Transaction(
            "t3", date(2024, 11, 20), Decimal("180.00"), "cc", "cc2", "Dinner",
            splits=[Split("want", "dining", PercentOfParent(Decimal("100")))],
        ),
        Transaction(
            "t4", date(2024, 11, 30), Decimal("1000.00"), "ach", "checking1", "Quarterly estimate",
            splits=[Split("tax", "federal", FixedAmount(Decimal("1000.00")))],
        ),
        # December payments toward November charges
        Transaction(
            "p1", date(2024, 12, 5), Decimal("500.00"), "ach", "checking1", "Chase Sapphire autopay",
            paying_account_id="cc1",
        ),
        Transaction(
            "p2", date(2024, 12, 10), Decimal("200.00"), "ach", "checking1", "AMEX GOLD ONLINE PMT",
        ),
    ]


@pytest.fixture
def november_incomes() -> list[Income]:
    return [
        Income("i1", date(2024, 11, 1), Decimal("4000.00"), Decimal("3000.00"), Decimal("1000.00"), "checking1", "Salary"),
        Income("i2", date(2024, 11, 15), Decimal("500.00"), Decimal("450.00"), Decimal("50.00"), "checking1", "Freelance"),
        Income("i3", date(2024, 12, 1), Decimal("4000.00"), Decimal("3000.00"), Decimal("1000.00"), "checking1", "Salary"),
    ]


@pytest.fixture
def recurring_expenses() -> list[RecurringExpense]:
    return [
        RecurringExpense("r1", "T-Mobile Bill", Decimal("120.00"), "monthly", date(2024, 11, 15), due_day=15),
        RecurringExpense("r2", "Streaming", Decimal("15.99"), "monthly", date(2024, 11, 2), due_day=2),
        RecurringExpense("r3", "Gym", Decimal("40.00"), "monthly", date(2024, 11, 1), is_active=False),
        RecurringExpense("r4", "Domain renewal", Decimal("24.00"), "yearly", date(2025, 3, 1)),
    ]
