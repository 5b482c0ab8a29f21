"""
Exact rational numbers on top of Python ints.

Every value is kept in canonical form: numerator and denominator are coprime and
the denominator is positive. Values are created only by RationalFactory.create,
which reduces them and interns them in an InternCache.
"""

from __future__ import annotations
from decimal import Decimal
from functools import cmp_to_key, reduce
import logging
from math import gcd
import numbers
import re
from typing import Literal

from quicktions import Fraction  # type: ignore

from .decimals import DECIMAL_ZERO, decimal_parts, from_float, int_to_str, make_decimal, parse_decimal, str_to_int
from .exceptions import DivisionByZero, EmptyInput, InvalidOperand, MalformedInput
from .intern_cache import InternCache
from .rounding import RoundMethod, digits, divide, scale10


logger = logging.getLogger(__name__)

_JSON_RE = re.compile(r'(-?[0-9]+)/([0-9]+)')

# only create() may pass it to Rational()
_CREATE_TOKEN = object()

# significant exponent of the approximate float conversion
FLOAT_DIGITS = 20


def _is_int(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


class Rational:
    """
    Immutable canonical fraction numerator/denominator.

    Arithmetic is done with methods (add, sub, mul, div, ...) or operators, both
    accept Rational operands only; there is no implicit conversion from or to
    int/float.
    """

    __slots__ = ('numerator', 'denominator', 'negative', '_string', '_json', '_factory')

    numerator: int
    denominator: int
    negative: bool

    def __init__(self, numerator: int, denominator: int, factory: RationalFactory | None, token: object = None) -> None:
        if token is not _CREATE_TOKEN:
            raise TypeError("Use RationalFactory.create() or from_* methods to get a Rational")
        setattr_ = object.__setattr__
        setattr_(self, 'numerator', numerator)
        setattr_(self, 'denominator', denominator)
        setattr_(self, 'negative', numerator < 0)
        # display and JSON strings are built on first use
        setattr_(self, '_string', None)
        setattr_(self, '_json', None)
        setattr_(self, '_factory', factory)

    def __setattr__(self, name, value):
        raise AttributeError("Rational is immutable")

    def __delattr__(self, name):
        raise AttributeError("Rational is immutable")

    def _owner(self, other: Rational | None = None) -> RationalFactory:
        # ZERO and ONE are shared by all factories: they take the factory of the
        # other operand, or the default one
        if self._factory is not None:
            return self._factory
        if other is not None and other._factory is not None:
            return other._factory
        return default_factory

    @staticmethod
    def _check(other) -> None:
        if not isinstance(other, Rational):
            raise TypeError(f"Expected Rational, got {type(other).__name__}")

    # arithmetic

    def add(self, other: Rational) -> Rational:
        self._check(other)
        return self._owner(other).create(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def sub(self, other: Rational) -> Rational:
        self._check(other)
        return self.add(other.negated())

    def mul(self, other: Rational) -> Rational:
        self._check(other)
        return self._owner(other).create(self.numerator * other.numerator, self.denominator * other.denominator)

    def div(self, other: Rational) -> Rational:
        self._check(other)
        return self.mul(other.inverted())

    def negated(self) -> Rational:
        return self._owner().create(-self.numerator, self.denominator)

    def abs(self) -> Rational:
        return self.negated() if self.negative else self

    def inverted(self) -> Rational:
        if self.numerator == 0:
            raise DivisionByZero("Inversion of zero")
        numerator = -self.denominator if self.negative else self.denominator
        return self._owner().create(numerator, abs(self.numerator))

    def __add__(self, other):
        return self.add(other) if isinstance(other, Rational) else NotImplemented

    def __sub__(self, other):
        return self.sub(other) if isinstance(other, Rational) else NotImplemented

    def __mul__(self, other):
        return self.mul(other) if isinstance(other, Rational) else NotImplemented

    def __truediv__(self, other):
        return self.div(other) if isinstance(other, Rational) else NotImplemented

    def __neg__(self):
        return self.negated()

    def __abs__(self):
        return self.abs()

    def __bool__(self):
        return self.numerator != 0

    # comparison

    def cmp(self, other: Rational) -> Literal[-1, 0, 1]:
        self._check(other)
        if self.negative == other.negative:
            a = self.numerator * other.denominator
            b = other.numerator * self.denominator
            return -1 if a < b else (1 if a > b else 0)
        return -1 if self.negative else 1

    def eq(self, other: Rational) -> bool:
        return self.cmp(other) == 0

    def ne(self, other: Rational) -> bool:
        return self.cmp(other) != 0

    def lt(self, other: Rational) -> bool:
        return self.cmp(other) == -1

    def le(self, other: Rational) -> bool:
        return self.cmp(other) != 1

    def gt(self, other: Rational) -> bool:
        return self.cmp(other) == 1

    def ge(self, other: Rational) -> bool:
        return self.cmp(other) != -1

    def __eq__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        # canonical form makes structural equality exact
        return self.numerator == other.numerator and self.denominator == other.denominator

    def __hash__(self):
        return hash((self.numerator, self.denominator))

    def __lt__(self, other):
        return self.lt(other) if isinstance(other, Rational) else NotImplemented

    def __le__(self, other):
        return self.le(other) if isinstance(other, Rational) else NotImplemented

    def __gt__(self, other):
        return self.gt(other) if isinstance(other, Rational) else NotImplemented

    def __ge__(self, other):
        return self.ge(other) if isinstance(other, Rational) else NotImplemented

    # rounding

    def round_by_rational(self, unit: Rational, method: RoundMethod | str = RoundMethod.TO_ZERO) -> Rational:
        """
        Snap to an integer multiple of unit.

        The quotient self/unit is rounded to an integer k by method, result is k*unit.
        """
        division = self.div(unit)
        k = divide(division.numerator, division.denominator, method)
        return self._owner(unit).create(unit.numerator * k, unit.denominator)

    def round_to_decimal(self, places: int, method: RoundMethod | str = RoundMethod.TO_ZERO) -> Decimal:
        """Decimal with given number of digits after the point (negative: before the point)."""
        return make_decimal(self._round_scaled(places, method), -places)

    def round_to_significants(self, count: int, method: RoundMethod | str = RoundMethod.TO_ZERO) -> Decimal:
        """
        Decimal with exactly count significant digits.

        The numerator is extended by count + len(denominator) digits, which is enough
        for the truncated quotient to have more than count digits; its length gives
        the decimal exponent. Then the value is rounded once at that exponent.
        """
        if count < 1:
            raise ValueError(f"Significant digits count must be positive, got {count}")
        if self.numerator == 0:
            return DECIMAL_ZERO
        extension = count + digits(self.denominator)
        truncated = divide(scale10(self.numerator, extension), self.denominator)
        surplus = digits(truncated) - count
        places = extension - surplus
        significand = self._round_scaled(places, method)
        if digits(significand) > count:
            # rounded up to the next power of ten
            significand //= 10
            places -= 1
        return make_decimal(significand, -places)

    def _round_scaled(self, places: int, method: RoundMethod | str) -> int:
        # self * 10**places rounded to int
        numerator = scale10(self.numerator, places) if places > 0 else self.numerator
        denominator = scale10(self.denominator, -places) if places < 0 else self.denominator
        return divide(numerator, denominator, method)

    # conversions

    def to_display_string(self) -> str:
        """'n' for integers, 'n/d' otherwise."""
        if self._string is None:
            string = int_to_str(self.numerator) if self.denominator == 1 else self.to_json()
            object.__setattr__(self, '_string', string)
        return self._string

    def to_json(self) -> str:
        """Lossless form 'n/d', read back by RationalFactory.from_json."""
        if self._json is None:
            json = '{}/{}'.format(int_to_str(self.numerator), int_to_str(self.denominator))
            object.__setattr__(self, '_json', json)
        return self._json

    def to_approximate_float(self) -> float:
        """Nearest float to the value truncated at 20 digits after the point."""
        division = divide(scale10(self.numerator, FLOAT_DIGITS), self.denominator)
        return float('{}e-{}'.format(int_to_str(division), FLOAT_DIGITS))

    def to_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __str__(self):
        return self.to_display_string()

    def __repr__(self):
        return 'Rational({}, {})'.format(int_to_str(self.numerator), int_to_str(self.denominator))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


class RationalFactory:
    """
    Creates canonical rationals and interns them in a cache.

    Caching is an optimization only: a factory with a disabled cache gives
    equal results.
    """

    def __init__(self, cache: InternCache | None = None) -> None:
        self.cache = cache if cache is not None else InternCache()
        if not self.cache.enabled:
            logger.debug('rational factory created with disabled cache')

    def create(self, numerator: int, denominator: int = 1) -> Rational:
        """Canonical numerator/denominator; the only way to get a new Rational."""
        if not _is_int(numerator):
            raise InvalidOperand(f"numerator must be int, got {type(numerator).__name__}")
        if not _is_int(denominator):
            raise InvalidOperand(f"denominator must be int, got {type(denominator).__name__}", denominator=denominator)
        if denominator <= 0:
            raise InvalidOperand("denominator must be positive", denominator=denominator)
        if numerator == 0:
            return ZERO

        g = gcd(numerator, denominator)
        numerator //= g
        denominator //= g
        if numerator == 1 and denominator == 1:
            return ONE

        key = (numerator, denominator)
        rational = self.cache.get(key)
        if rational is None:
            rational = Rational(numerator, denominator, self, _CREATE_TOKEN)
            self.cache.put(rational, key)
        return rational

    def from_json(self, text: str) -> Rational:
        """Parse strict 'integer/integer' form, as given by Rational.to_json."""
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        # validate first: the cache is shared with looser from_string keys
        match = _JSON_RE.fullmatch(text)
        if match is None:
            raise MalformedInput(f"Malformed rational JSON: {text!r}", text=text)
        rational = self.cache.get(text)
        if rational is None:
            rational = self.create(str_to_int(match.group(1)), str_to_int(match.group(2)))
            self.cache.put(rational, text)
        return rational

    def from_string(self, text: str) -> Rational:
        """Parse 'decimal' or 'decimal/decimal', e.g. '1.5', '-2e3', '1/3', '0.5/1.5'."""
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        rational = self.cache.get(text)
        if rational is None:
            parts = text.split('/')
            if len(parts) > 2:
                raise MalformedInput(f"Too many '/' in rational: {text!r}", text=text)
            rational = self.from_decimal(parse_decimal(parts[0]))
            if len(parts) == 2:
                rational = rational.div(self.from_decimal(parse_decimal(parts[1])))
            self.cache.put(rational, text)
        return rational

    def from_number(self, x: int | float) -> Rational:
        """Exact value of the shortest decimal representing x."""
        if isinstance(x, bool) or not isinstance(x, (int, float)):
            raise TypeError(f"Expected int or float, got {type(x).__name__}")
        # equal int and float are one dict key, but may denote different values
        key = (type(x).__name__, x)
        rational = self.cache.get(key)
        if rational is None:
            rational = self.from_decimal(from_float(x))
            self.cache.put(rational, key)
        return rational

    def from_decimal(self, value: Decimal) -> Rational:
        if not isinstance(value, Decimal):
            raise TypeError(f"Expected Decimal, got {type(value).__name__}")
        key = str(value)
        rational = self.cache.get(key)
        if rational is None:
            significand, exponent = decimal_parts(value)
            rational = self.create(
                scale10(significand, exponent if exponent > 0 else 0),
                scale10(1, -exponent if exponent < 0 else 0),
            )
            self.cache.put(rational, key)
        return rational

    def from_fraction(self, value: numbers.Rational | Fraction) -> Rational:
        """Convert fractions.Fraction, quicktions.Fraction or int."""
        if not isinstance(value, (numbers.Rational, Fraction)):
            raise TypeError(f"Expected rational number, got {type(value).__name__}")
        return self.create(int(value.numerator), int(value.denominator))

    # aggregates

    def min(self, *rationals: Rational) -> Rational:
        if not rationals:
            raise EmptyInput("min() of empty arguments list")
        return reduce(lambda result, r: result if result.lt(r) else r, rationals)

    def max(self, *rationals: Rational) -> Rational:
        if not rationals:
            raise EmptyInput("max() of empty arguments list")
        return reduce(lambda result, r: result if result.gt(r) else r, rationals)

    def sum(self, *rationals: Rational) -> Rational:
        return reduce(self._add, rationals, ZERO)

    def avg(self, *rationals: Rational) -> Rational:
        if not rationals:
            raise EmptyInput("avg() of empty arguments list")
        total = self.sum(*rationals)
        return self.create(total.numerator, total.denominator * len(rationals))

    def _add(self, a: Rational, b: Rational) -> Rational:
        # same as a.add(b), but the result is made by this factory
        Rational._check(b)
        return self.create(a.numerator * b.denominator + b.numerator * a.denominator, a.denominator * b.denominator)

    def median(self, *rationals: Rational) -> Rational:
        if not rationals:
            raise EmptyInput("median() of empty arguments list")
        ordered = sorted(rationals, key=cmp_to_key(lambda a, b: a.cmp(b)))
        half = len(ordered) // 2
        if len(ordered) % 2:
            return ordered[half]
        return self.avg(ordered[half - 1], ordered[half])


ZERO = Rational(0, 1, None, _CREATE_TOKEN)
ONE = Rational(1, 1, None, _CREATE_TOKEN)

default_factory = RationalFactory()

# shortcuts to the default factory; note that min, max and sum shadow builtins here
create = default_factory.create
from_json = default_factory.from_json
from_string = default_factory.from_string
from_number = default_factory.from_number
from_decimal = default_factory.from_decimal
from_fraction = default_factory.from_fraction
min = default_factory.min
max = default_factory.max
sum = default_factory.sum
avg = default_factory.avg
median = default_factory.median


def to_rational(x: Rational | int | float | Decimal | Fraction, factory: RationalFactory | None = None) -> Rational:
    """Convert any supported number to Rational."""
    if factory is None:
        factory = default_factory
    if isinstance(x, Rational):
        return x
    if isinstance(x, bool):
        raise TypeError("Can't convert bool to Rational")
    if isinstance(x, (int, float)):
        return factory.from_number(x)
    if isinstance(x, Decimal):
        return factory.from_decimal(x)
    if isinstance(x, (numbers.Rational, Fraction)):
        return factory.from_fraction(x)
    raise TypeError(f"Can't convert {type(x).__name__} to Rational")
