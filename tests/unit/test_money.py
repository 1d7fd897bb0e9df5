"""Unit tests for money primitives"""

from decimal import Decimal

from household_ledger.domain.money import (
    amount_from_percent,
    format_currency,
    group_by,
    parse_amount,
    percent_of_total,
    round_amount,
    sum_amounts,
    to_decimal,
)


def test_round_amount_no_float_artifacts():
    """Rounding common cent values never drifts"""
    assert round_amount(100.456) == Decimal("100.46")
    assert round_amount(999.99) == Decimal("999.99")
    assert round_amount(1000.00) == Decimal("1000.00")
    assert round_amount(1.005) == Decimal("1.01")


def test_round_amount_half_away_from_zero():
    """Halves round away from zero for both signs"""
    assert round_amount(Decimal("2.345")) == Decimal("2.35")
    assert round_amount(Decimal("-2.345")) == Decimal("-2.35")
    assert round_amount(Decimal("2.5"), 0) == Decimal("3")


def test_format_currency_sign_before_symbol():
    """Negative values render as -$500.00"""
    assert format_currency(-500) == "-$500.00"
    assert format_currency(1234567.891) == "$1,234,567.89"
    assert format_currency(0) == "$0.00"
    assert format_currency(12.5, decimals=0) == "$13"
    assert format_currency(10, symbol="€") == "€10.00"


def test_format_currency_negative_decimals_clamped():
    assert format_currency(1234.5, decimals=-1) == "$1,235"


def test_parse_amount_strips_symbols():
    """Currency symbols and separators are ignored"""
    assert parse_amount("$1,234.56") == Decimal("1234.56")
    assert parse_amount("-$500.00") == Decimal("-500.00")
    assert parse_amount("  42 ") == Decimal("42")


def test_parse_amount_reads_leading_number():
    """Trailing junk after the first number is dropped"""
    assert parse_amount("1.2.3") == Decimal("1.2")
    assert parse_amount("12-3") == Decimal("12")
    assert parse_amount("$.50") == Decimal(".50")
    assert parse_amount("--5") == 0


def test_parse_amount_unparseable_is_zero():
    """Garbage input yields 0 instead of raising"""
    assert parse_amount("abc") == 0
    assert parse_amount("") == 0
    assert parse_amount(None) == 0


def test_to_decimal_degrades_safely():
    """Non-numeric and non-finite values coerce to 0"""
    assert to_decimal(float("nan")) == 0
    assert to_decimal(float("inf")) == 0
    assert to_decimal("Infinity") == 0
    assert to_decimal(object()) == 0
    assert to_decimal(0.1) == Decimal("0.1")


def test_percent_of_total_zero_total():
    """Dividing by a zero total yields 0"""
    assert percent_of_total(50, 0) == 0
    assert percent_of_total(50, 200) == Decimal("25.00")
    assert percent_of_total(1, 3) == Decimal("33.33")


def test_amount_from_percent():
    assert amount_from_percent(25, 200) == Decimal("50.00")
    assert amount_from_percent(33.33, 100) == Decimal("33.33")


def test_sum_amounts():
    """Summation is exact and empty input sums to 0"""
    assert sum_amounts([]) == 0
    assert sum_amounts([100, -50, 200]) == 250
    assert sum_amounts([0.1] * 10) == Decimal("1.0")
    assert sum_amounts([999.99, 0.01]) == Decimal("1000.00")


def test_sum_amounts_order_independent():
    values = [19.99, 0.01, 250.5, -3.33, 1000]
    assert sum_amounts(values) == sum_amounts(reversed(values))


def test_group_by_is_stable():
    """Groups keep the original relative order of their items"""
    items = [("a", 1), ("b", 2), ("a", 3), ("c", 4), ("b", 5)]
    groups = group_by(items, lambda item: item[0])

    assert list(groups) == ["a", "b", "c"]
    assert groups["a"] == [("a", 1), ("a", 3)]
    assert groups["b"] == [("b", 2), ("b", 5)]
    assert group_by([], lambda item: item) == {}
