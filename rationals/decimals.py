"""
Glue to the standard decimal type.

A decimal is treated as a pair (significand, exponent) denoting
significand * 10**exponent; only finite values are accepted.
"""

import decimal
import math
from decimal import Decimal

from .exceptions import MalformedInput


DECIMAL_ZERO = Decimal(0)


def parse_decimal(text: str) -> Decimal:
    """Parse a decimal numeral: sign, digits, optional fraction and exponent."""
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    try:
        value = Decimal(text)
    except decimal.InvalidOperation:
        raise MalformedInput(f"Malformed decimal numeral: {text!r}", text=text) from None
    if not value.is_finite():
        raise MalformedInput(f"Decimal numeral is not finite: {text!r}", text=text)
    return value


def from_float(x: float | int) -> Decimal:
    """Shortest decimal that reads back as the same float; ints are exact."""
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"Expected int or float, got {type(x).__name__}")
    if isinstance(x, int):
        return Decimal(x)
    if not math.isfinite(x):
        raise MalformedInput(f"Number is not finite: {x!r}", text=repr(x))
    return Decimal(repr(x))


def decimal_parts(value: Decimal) -> tuple[int, int]:
    """(significand, exponent) of a finite decimal."""
    if not value.is_finite():
        raise MalformedInput(f"Decimal is not finite: {value!r}", text=str(value))
    sign, digit_tuple, exponent = value.as_tuple()
    significand = int(Decimal((0, digit_tuple, 0)))
    return (-significand if sign else significand), exponent


def make_decimal(significand: int, exponent: int) -> Decimal:
    """Exact significand * 10**exponent, not rounded by decimal context."""
    sign, digit_tuple, _ = Decimal(significand).as_tuple()
    return Decimal((sign, digit_tuple, exponent))


# int <-> str through Decimal is exact and not bound by sys.get_int_max_str_digits()

def int_to_str(n: int) -> str:
    return str(Decimal(n))


def str_to_int(text: str) -> int:
    return int(Decimal(text))
