"""Pydantic schemas validating raw ledger records at the ingestion boundary

Records arrive as loosely-typed dicts from the CRUD layer (camelCase keys,
ISO timestamps, floats). They are validated once here and converted into
the domain dataclasses the engine works on.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from household_ledger.domain.exceptions import InvalidRecordError
from household_ledger.domain.models import (
    ACCOUNT_TYPES,
    FREQUENCIES,
    ROUTING_TYPES,
    TRANSACTION_METHODS,
    Account,
    FixedAmount,
    Income,
    PercentOfParent,
    RecurringExpense,
    Split,
    Transaction,
)
from household_ledger.infrastructure.observability.metrics import ingest_rejection_counter
from household_ledger.utils.date_utils import parse_local_date


def _local_date(value: Any) -> date:
    parsed = parse_local_date(value)
    if parsed is None:
        raise ValueError(f"expected a YYYY-MM-DD date, got {value!r}")
    return parsed


def _money(value: Any) -> Any:
    # Floats go through repr() so 999.99 stays 999.99 as a Decimal
    if isinstance(value, float):
        return repr(value)
    return value


LocalDate = Annotated[date, BeforeValidator(_local_date)]
Money = Annotated[Decimal, BeforeValidator(_money)]


def _one_of(value: str, allowed: tuple, label: str) -> str:
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ValueError(f"{label} must be one of {', '.join(allowed)}")
    return normalized


class RecordIn(BaseModel):
    """Base schema: accepts snake_case or camelCase keys, ignores unknown ones"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SplitIn(RecordIn):
    """Split of a transaction; amount wins over percent when both are sent"""

    type: str
    target: str = Field(..., min_length=1)
    amount: Optional[Money] = None
    percent: Optional[Money] = Field(None, ge=0, le=100)

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        return _one_of(value, ROUTING_TYPES, "split type")

    def to_domain(self) -> Split:
        if self.amount is not None:
            allocation = FixedAmount(self.amount)
        elif self.percent is not None:
            allocation = PercentOfParent(self.percent)
        else:
            allocation = None
        return Split(type=self.type, target=self.target, allocation=allocation)


class TransactionIn(RecordIn):
    """Expense or payment transaction"""

    id: str = Field(..., min_length=1)
    amount: Money
    date: LocalDate
    method: str
    account_id: str = Field(..., min_length=1)
    paying_account_id: Optional[str] = None
    description: str = ""
    splits: List[SplitIn] = Field(default_factory=list)

    @field_validator("method")
    @classmethod
    def check_method(cls, value: str) -> str:
        return _one_of(value, TRANSACTION_METHODS, "method")

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.id,
            date=self.date,
            amount=self.amount,
            method=self.method,
            account_id=self.account_id,
            description=self.description,
            paying_account_id=self.paying_account_id or None,
            splits=[split.to_domain() for split in self.splits],
        )


class IncomeIn(RecordIn):
    """Income entry"""

    id: str = ""
    gross_amount: Money
    net_amount: Money
    taxes: Money = Decimal("0")
    date: LocalDate
    account_id: str = Field(..., min_length=1)
    source: str = ""

    def to_domain(self) -> Income:
        return Income(
            income_id=self.id,
            date=self.date,
            gross_amount=self.gross_amount,
            net_amount=self.net_amount,
            taxes=self.taxes,
            account_id=self.account_id,
            source=self.source,
        )


class AccountIn(RecordIn):
    """Household account"""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: str
    is_active: bool = True
    credit_limit: Optional[Money] = None
    current_balance: Optional[Money] = None

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        return _one_of(value, ACCOUNT_TYPES, "account type")

    def to_domain(self) -> Account:
        return Account(
            account_id=self.id,
            name=self.name,
            type=self.type,
            is_active=self.is_active,
            credit_limit=self.credit_limit,
            current_balance=self.current_balance,
        )


class RecurringExpenseIn(RecordIn):
    """Recurring expense definition"""

    id: str = Field(..., min_length=1)
    description: str = ""
    amount: Money
    frequency: str
    due_day: Optional[int] = Field(None, ge=1, le=31)
    next_due_date: LocalDate
    is_active: bool = True

    @field_validator("frequency")
    @classmethod
    def check_frequency(cls, value: str) -> str:
        return _one_of(value, FREQUENCIES, "frequency")

    def to_domain(self) -> RecurringExpense:
        return RecurringExpense(
            expense_id=self.id,
            description=self.description,
            amount=self.amount,
            frequency=self.frequency,
            next_due_date=self.next_due_date,
            due_day=self.due_day,
            is_active=self.is_active,
        )


SchemaT = TypeVar("SchemaT", bound=RecordIn)


def parse_records(schema: Type[SchemaT], raw_records: Iterable[dict], record_type: str) -> List[Any]:
    """
    Validate raw dicts and convert them to domain objects.

    Raises:
        InvalidRecordError: on the first record that fails validation
    """
    records = []
    for index, raw in enumerate(raw_records):
        try:
            records.append(schema.model_validate(raw).to_domain())
        except ValidationError as e:
            ingest_rejection_counter.labels(record=record_type).inc()
            raise InvalidRecordError(record_type, f"item {index}: {e.errors()[0]['msg']}") from e
    return records


def parse_transactions(raw_records: Iterable[dict]) -> List[Transaction]:
    return parse_records(TransactionIn, raw_records, "transaction")


def parse_incomes(raw_records: Iterable[dict]) -> List[Income]:
    return parse_records(IncomeIn, raw_records, "income")


def parse_accounts(raw_records: Iterable[dict]) -> List[Account]:
    return parse_records(AccountIn, raw_records, "account")


def parse_recurring_expenses(raw_records: Iterable[dict]) -> List[RecurringExpense]:
    return parse_records(RecurringExpenseIn, raw_records, "recurring_expense")
