"""Money primitives - exact decimal arithmetic for ledger amounts

Every amount entering the engine goes through ``to_decimal`` so that values
such as 999.99 or 100.456 never pick up binary floating-point drift.
Functions here are total: bad input degrades to zero instead of raising,
because their results feed dashboards where a zero beats a crashed report.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Callable, Dict, Hashable, Iterable, List, TypeVar

from household_ledger.config import settings

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def to_decimal(value: Any) -> Decimal:
    """Coerce int/float/str/Decimal into a finite Decimal, or 0 when impossible"""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ZERO
        # repr() gives the shortest round-tripping text, so 0.1 -> "0.1"
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


def round_amount(amount: Any, decimals: int = 2) -> Decimal:
    """
    Round half away from zero at the given decimal place.

    Example:
        round_amount(100.456) -> Decimal("100.46")
        round_amount(-2.345) -> Decimal("-2.35")
    """
    value = to_decimal(amount)
    try:
        return value.quantize(Decimal(10) ** -decimals, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Exceeds decimal context precision; leave the value unrounded
        return value


def format_currency(amount: Any, decimals: int = 2, symbol: str | None = None) -> str:
    """
    Render an amount with thousands separators and a currency symbol.

    Negative values carry the sign before the symbol: "-$500.00".
    """
    decimals = max(0, decimals)
    symbol = settings.currency_symbol if symbol is None else symbol
    value = round_amount(amount, decimals)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def parse_amount(text: Any) -> Decimal:
    """
    Strip currency symbols and separators and return the leading numeric value.

    Anything after the first complete number is ignored ("1.2.3" -> 1.2,
    "12-3" -> 12). Returns 0 for unparseable input. Callers that need to tell
    "no amount" apart from a real zero must check the raw text themselves.
    """
    if not isinstance(text, str):
        return to_decimal(text)
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", text))
    return to_decimal(match.group()) if match else ZERO


def percent_of_total(part: Any, total: Any) -> Decimal:
    """Return part/total*100 rounded to cents, or 0 when total is 0"""
    denominator = to_decimal(total)
    if denominator == 0:
        return ZERO
    return round_amount(to_decimal(part) / denominator * HUNDRED)


def amount_from_percent(percent: Any, total: Any) -> Decimal:
    """Return percent/100*total rounded to cents"""
    return round_amount(to_decimal(percent) / HUNDRED * to_decimal(total))


def sum_amounts(amounts: Iterable[Any]) -> Decimal:
    """Exact, order-independent summation; empty input sums to 0"""
    return sum((to_decimal(a) for a in amounts), ZERO)


def group_by(items: Iterable[T], key_fn: Callable[[T], K]) -> Dict[K, List[T]]:
    """Stable partition: groups keep the original relative order of their items"""
    groups: Dict[K, List[T]] = {}
    for item in items:
        groups.setdefault(key_fn(item), []).append(item)
    return groups
