"""Domain models - pure Python dataclasses representing ledger records and reports"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from household_ledger.domain.money import ZERO, round_amount

# Routing types (how money is categorized)
ROUTING_TYPES = ("need", "want", "debt", "tax", "savings", "other")

ACCOUNT_TYPES = ("checking", "savings", "credit_card", "cash", "investment", "loan", "other")
DEBT_ACCOUNT_TYPES = ("credit_card", "loan")
ASSET_ACCOUNT_TYPES = ("checking", "savings", "cash", "investment")

# Transaction methods: credit card, cash, ACH, other
TRANSACTION_METHODS = ("cc", "cash", "ach", "other")

FREQUENCIES = ("daily", "weekly", "monthly", "yearly")

FORECAST_STATUSES = ("on-track", "over", "under")

# type -> target -> total
RoutingSummary = Dict[str, Dict[str, Decimal]]


def _cents(value: Decimal) -> float:
    """JSON-ready amount"""
    return float(round_amount(value))


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of local calendar days"""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class FixedAmount:
    """Split allocation given as an explicit amount (authoritative)"""

    value: Decimal


@dataclass(frozen=True)
class PercentOfParent:
    """Split allocation given as a percentage (0-100) of the parent amount"""

    value: Decimal


Allocation = Union[FixedAmount, PercentOfParent]


@dataclass
class Split:
    """Sub-allocation of a transaction into a routing type and target bucket"""

    type: str  # one of ROUTING_TYPES
    target: str
    allocation: Optional[Allocation] = None


@dataclass
class Transaction:
    """Expense or payment recorded against an account"""

    transaction_id: str
    date: date
    amount: Decimal
    method: str  # one of TRANSACTION_METHODS
    account_id: str
    description: str = ""
    paying_account_id: Optional[str] = None  # debt account this transaction pays down
    splits: List[Split] = field(default_factory=list)


@dataclass
class Income:
    """Income entry with gross/net/tax breakdown"""

    income_id: str
    date: date
    gross_amount: Decimal
    net_amount: Decimal
    taxes: Decimal
    account_id: str
    source: str = ""


@dataclass
class Account:
    """Household account"""

    account_id: str
    name: str
    type: str  # one of ACCOUNT_TYPES
    is_active: bool = True
    credit_limit: Optional[Decimal] = None
    current_balance: Optional[Decimal] = None


@dataclass
class RecurringExpense:
    """Recurring expense definition with its next projected due date"""

    expense_id: str
    description: str
    amount: Decimal
    frequency: str  # one of FREQUENCIES
    next_due_date: date
    due_day: Optional[int] = None  # 1-31, monthly only
    is_active: bool = True


@dataclass
class PeriodSummary:
    """Money-routing summary for one household and reporting period"""

    household_id: str
    period: DateRange
    total_income: Decimal
    total_expense: Decimal
    tax_total: Decimal
    by_method: Dict[str, Decimal]
    routing_summary: RoutingSummary
    transaction_count: int
    income_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "household_id": self.household_id,
            "start": self.period.start.isoformat(),
            "end": self.period.end.isoformat(),
            "total_income": _cents(self.total_income),
            "total_expense": _cents(self.total_expense),
            "tax_total": _cents(self.tax_total),
            "by_method": {method: _cents(total) for method, total in self.by_method.items()},
            "routing_summary": {
                split_type: {target: _cents(total) for target, total in targets.items()}
                for split_type, targets in self.routing_summary.items()
            },
            "transaction_count": self.transaction_count,
            "income_count": self.income_count,
        }


@dataclass
class ForecastResult:
    """Expected vs actual recurring spending"""

    expected_total: Decimal
    actual_total: Decimal
    difference: Decimal
    percent_difference: Decimal
    status: str  # one of FORECAST_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expected_total": _cents(self.expected_total),
            "actual_total": _cents(self.actual_total),
            "difference": _cents(self.difference),
            "percent_difference": _cents(self.percent_difference),
            "status": self.status,
        }


@dataclass
class SBNLResult:
    """Spent-but-not-listed estimate for a single credit account"""

    account_id: str
    account_name: str
    tracked_expenses: Decimal
    estimated_payment: Decimal
    spent_but_not_listed: Decimal
    percentage: int
    transaction_count: int = 0
    match_method: str = "none"  # "linked" | "description" | "none"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account_id": self.account_id,
            "account_name": self.account_name,
            "tracked_expenses": _cents(self.tracked_expenses),
            "estimated_payment": _cents(self.estimated_payment),
            "spent_but_not_listed": _cents(self.spent_but_not_listed),
            "percentage": self.percentage,
            "transaction_count": self.transaction_count,
            "match_method": self.match_method,
        }


@dataclass
class SBNLReport:
    """Household-level SBNL totals across every credit account"""

    year: int
    month: int
    accounts: List[SBNLResult]
    total_tracked: Decimal = ZERO
    total_payments: Decimal = ZERO
    total_spent_but_not_listed: Decimal = ZERO
    percentage: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "accounts": [result.to_dict() for result in self.accounts],
            "total_tracked": _cents(self.total_tracked),
            "total_payments": _cents(self.total_payments),
            "total_spent_but_not_listed": _cents(self.total_spent_but_not_listed),
            "percentage": self.percentage,
        }


@dataclass
class SBNLTrend:
    """SBNL behaviour over several months"""

    average: Decimal
    trend: str  # "increasing" | "decreasing" | "stable" | "insufficient_data"
    highest: Optional[Decimal]
    lowest: Optional[Decimal]
    volatility: Decimal


@dataclass
class SBNLInsight:
    severity: str  # "high" | "medium" | "low"
    message: str


@dataclass
class AccountPayments:
    """Explicitly linked payments toward one debt account"""

    account_name: str
    amount: Decimal
    count: int


@dataclass
class PaymentAnalysis:
    """Debt payment totals derived from explicit paying-account links"""

    total_credit_card_payments: Decimal
    total_loan_payments: Decimal
    total_debt_payments: Decimal
    payment_count: int
    avg_payment_amount: Decimal
    debt_reduction_rate: Decimal
    payment_velocity: Decimal
    payments_by_account: Dict[str, AccountPayments]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_credit_card_payments": _cents(self.total_credit_card_payments),
            "total_loan_payments": _cents(self.total_loan_payments),
            "total_debt_payments": _cents(self.total_debt_payments),
            "payment_count": self.payment_count,
            "avg_payment_amount": _cents(self.avg_payment_amount),
            "debt_reduction_rate": _cents(self.debt_reduction_rate),
            "payment_velocity": _cents(self.payment_velocity),
            "payments_by_account": {
                account_id: {
                    "account_name": payments.account_name,
                    "amount": _cents(payments.amount),
                    "count": payments.count,
                }
                for account_id, payments in self.payments_by_account.items()
            },
        }


@dataclass
class CreditUtilization:
    """Credit card balance relative to its limit"""

    current_balance: Decimal
    credit_limit: Decimal
    utilization_percent: int
    available_credit: Decimal
    status: str  # "healthy" | "warning" | "danger"


@dataclass
class NetWorth:
    """Assets minus liabilities across active accounts, with per-name balances"""

    assets: Decimal
    liabilities: Decimal
    net_worth: Decimal
    asset_distribution: Dict[str, Decimal] = field(default_factory=dict)
    liability_distribution: Dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assets": _cents(self.assets),
            "liabilities": _cents(self.liabilities),
            "net_worth": _cents(self.net_worth),
            "asset_distribution": {name: _cents(v) for name, v in self.asset_distribution.items()},
            "liability_distribution": {name: _cents(v) for name, v in self.liability_distribution.items()},
        }
