"""Math helpers: add, subtract, multiply, divide, mod, round, floor, ceil.

Operands are coerced to numbers the way JavaScript does: numeric strings
parse, booleans count as 0/1, anything else becomes NaN. Division by zero
yields 0.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from decimal import ROUND_FLOOR, Decimal
from typing import Any

from vitrine.template.helpers import is_number, to_string

NAN = float("nan")


def to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return NAN
    return NAN


def _finite(value: int | float) -> bool:
    return not (isinstance(value, float) and not math.isfinite(value))


def add(a: Any, b: Any) -> Any:
    """Sum two numbers; if either side is a string, concatenate instead."""
    if isinstance(a, str) or isinstance(b, str):
        return to_string(a) + to_string(b)
    return to_number(a) + to_number(b)


def subtract(a: Any, b: Any) -> int | float:
    return to_number(a) - to_number(b)


def multiply(a: Any, b: Any) -> int | float:
    return to_number(a) * to_number(b)


def divide(a: Any, b: Any) -> int | float:
    """Divide ``a`` by ``b``; a zero divisor gives 0."""
    divisor = to_number(b)
    if divisor == 0:
        return 0
    return to_number(a) / divisor


def mod(a: Any, b: Any) -> int | float:
    """Remainder with the sign of the dividend; a zero divisor gives NaN."""
    x, y = to_number(a), to_number(b)
    if y == 0 or not (_finite(x) and _finite(y)):
        return NAN
    result = math.fmod(x, y)
    return int(result) if isinstance(x, int) and isinstance(y, int) else result


def round_(value: Any, decimals: Any = 0) -> int | float:
    """Round half up to ``decimals`` places.

    Example:
        >>> round_(2.345, 2)
        2.35
        >>> round_(2.5)
        3
    """
    number = to_number(value)
    if not _finite(number):
        return number
    places = int(to_number(decimals)) if _finite(to_number(decimals)) else 0
    shifted = Decimal(repr(float(number))).scaleb(places)
    rounded = (shifted + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    result = float(rounded.scaleb(-places))
    return int(result) if places <= 0 else result


def floor(value: Any) -> int | float:
    number = to_number(value)
    return math.floor(number) if _finite(number) else number


def ceil(value: Any) -> int | float:
    number = to_number(value)
    return math.ceil(number) if _finite(number) else number


ARITHMETIC_HELPERS: dict[str, Callable[..., Any]] = {
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
    "divide": divide,
    "mod": mod,
    "round": round_,
    "floor": floor,
    "ceil": ceil,
}
