"""Exception hierarchy for rational numbers."""

from __future__ import annotations
from typing import Any


class RationalError(Exception):
    """Base class for all errors raised by rationals."""


class InvalidOperand(RationalError, ValueError):
    """Raised when a rational is constructed from a bad numerator/denominator."""

    def __init__(self, message: str, denominator: Any = None) -> None:
        super().__init__(message)
        self.denominator = denominator


class DivisionByZero(RationalError, ZeroDivisionError):
    """Raised on inversion of zero, directly or via division."""


class EmptyInput(RationalError, ValueError):
    """Raised when an aggregate is undefined for an empty argument list."""


class MalformedInput(RationalError, ValueError):
    """Raised when a numeral or JSON string can't be parsed."""

    def __init__(self, message: str, text: Any = None) -> None:
        super().__init__(message)
        self.text = text
