"""Unit tests for debt payment analysis"""

from datetime import date
from decimal import Decimal

from household_ledger.domain.models import Account, Transaction
from household_ledger.domain.money import round_amount
from household_ledger.domain.payments import analyze_payments, calculate_net_worth, credit_utilization


def _payment(txn_id: str, amount: str, paying: str | None, day: int = 1) -> Transaction:
    return Transaction(txn_id, date(2025, 12, day), Decimal(amount), "ach", "checking1", paying_account_id=paying)


def test_analyze_payments_no_payments(accounts):
    transactions = [_payment("tx1", "100", None), _payment("tx2", "50", None)]

    result = analyze_payments(transactions, accounts, Decimal("150"), 1)

    assert result.total_debt_payments == 0
    assert result.payment_count == 0
    assert result.avg_payment_amount == 0
    assert result.debt_reduction_rate == 0
    assert result.payment_velocity == 0
    assert result.payments_by_account == {}


def test_analyze_payments_credit_cards(accounts):
    transactions = [
        _payment("tx1", "500", "cc1", 1),
        _payment("tx2", "300", "cc2", 15),
        _payment("tx3", "100", None, 10),
    ]

    result = analyze_payments(transactions, accounts, Decimal("900"), 1)

    assert result.total_credit_card_payments == Decimal("800")
    assert result.total_loan_payments == 0
    assert result.total_debt_payments == Decimal("800")
    assert result.payment_count == 2
    assert result.avg_payment_amount == Decimal("400")
    assert round_amount(result.debt_reduction_rate) == Decimal("88.89")
    assert result.payment_velocity == 2
    assert result.payments_by_account["cc1"].account_name == "Chase Sapphire"
    assert result.payments_by_account["cc1"].amount == Decimal("500")
    assert result.payments_by_account["cc1"].count == 1


def test_analyze_payments_mixed_and_repeated(accounts):
    transactions = [
        _payment("tx1", "500", "cc1", 1),
        _payment("tx2", "450", "loan1", 5),
        _payment("tx3", "300", "cc1", 15),
        _payment("tx4", "75", "checking1", 20),  # not a debt account
        _payment("tx5", "60", "unknown", 21),
    ]

    result = analyze_payments(transactions, accounts, Decimal("1400"), 2)

    assert result.total_credit_card_payments == Decimal("800")
    assert result.total_loan_payments == Decimal("450")
    assert result.total_debt_payments == Decimal("1250")
    assert result.payment_count == 3
    assert round_amount(result.avg_payment_amount) == Decimal("416.67")
    assert round_amount(result.debt_reduction_rate) == Decimal("89.29")
    assert result.payment_velocity == Decimal("1.5")
    assert result.payments_by_account["cc1"].count == 2
    assert set(result.payments_by_account) == {"cc1", "loan1"}


def test_analyze_payments_guards_zero_denominators(accounts):
    result = analyze_payments([_payment("tx1", "100", "cc1")], accounts, 0, 0)
    assert result.debt_reduction_rate == 0
    assert result.payment_velocity == 0


def test_analyze_payments_to_dict(accounts):
    data = analyze_payments([_payment("tx1", "100.005", "cc1")], accounts, 200, 1).to_dict()
    assert data["payments_by_account"]["cc1"] == {"account_name": "Chase Sapphire", "amount": 100.01, "count": 1}


def test_credit_utilization_bands():
    assert credit_utilization(2000, 10000).status == "healthy"
    assert credit_utilization(3000, 10000).status == "healthy"
    assert credit_utilization(5000, 10000).status == "warning"
    assert credit_utilization(7000, 10000).status == "danger"


def test_credit_utilization_values():
    result = credit_utilization(Decimal("1500"), Decimal("5000"))
    assert result.utilization_percent == 30
    assert result.available_credit == Decimal("3500")

    over = credit_utilization(6000, 5000)
    assert over.utilization_percent == 120
    assert over.available_credit == 0


def test_credit_utilization_without_limit():
    result = credit_utilization(500, None)
    assert result.utilization_percent == 0
    assert result.status == "healthy"
    assert result.credit_limit == 0


def test_calculate_net_worth(accounts):
    result = calculate_net_worth(accounts)

    assert result.assets == Decimal("5000")
    assert result.liabilities == Decimal("18500")
    assert result.net_worth == Decimal("-13500")
    assert result.asset_distribution == {"Chase Checking": Decimal("5000")}
    assert result.liability_distribution == {
        "Chase Sapphire": Decimal("2000"),
        "Amex Gold": Decimal("1500"),
        "Car Loan": Decimal("15000"),
    }


def test_calculate_net_worth_skips_inactive_and_card_credit():
    """A card in credit adds nothing; inactive and "other" accounts are ignored"""
    accounts = [
        Account("sav", "Savings", "savings", current_balance=Decimal("1200.50")),
        Account("inv", "Brokerage", "investment", current_balance=Decimal("800")),
        Account("cc", "Visa", "credit_card", current_balance=Decimal("-25")),
        Account("old", "Old Checking", "checking", is_active=False, current_balance=Decimal("999")),
        Account("misc", "Gift cards", "other", current_balance=Decimal("50")),
        Account("cash", "Wallet", "cash"),
    ]

    result = calculate_net_worth(accounts)

    assert result.assets == Decimal("2000.50")
    assert result.liabilities == 0
    assert result.liability_distribution == {}
    assert result.asset_distribution["Wallet"] == 0
    assert "Old Checking" not in result.asset_distribution
    assert result.to_dict()["net_worth"] == 2000.5
