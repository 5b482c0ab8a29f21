"""
Integer division with rounding and power-of-ten scaling.

Python ints are arbitrary precision, so only rounding policy is added here.
"""

from enum import Enum
import math
from typing import Callable

from .exceptions import DivisionByZero


_LOG10_2 = math.log10(2)


class RoundMethod(str, Enum):
    """How a non-integer quotient is mapped to an integer."""
    TO_ZERO = 'toZero'
    AWAY_FROM_ZERO = 'awayFromZero'
    FLOOR = 'floor'
    CEIL = 'ceil'
    HALF_TO_ZERO = 'halfToZero'
    HALF_AWAY_FROM_ZERO = 'halfAwayFromZero'
    HALF_EVEN = 'halfEven'


# each rule gets (|quotient|, 2*remainder compared to |divisor| as -1/0/1, negative result)
# and says whether |quotient| must be incremented; remainder is known to be non-zero
_Rule = Callable[[int, int, bool], bool]

_RULES: dict[RoundMethod, _Rule] = {
    RoundMethod.TO_ZERO: lambda q, half, neg: False,
    RoundMethod.AWAY_FROM_ZERO: lambda q, half, neg: True,
    RoundMethod.FLOOR: lambda q, half, neg: neg,
    RoundMethod.CEIL: lambda q, half, neg: not neg,
    RoundMethod.HALF_TO_ZERO: lambda q, half, neg: half > 0,
    RoundMethod.HALF_AWAY_FROM_ZERO: lambda q, half, neg: half >= 0,
    RoundMethod.HALF_EVEN: lambda q, half, neg: half > 0 or (half == 0 and q % 2 == 1),
}


def get_round_method(method: RoundMethod | str) -> RoundMethod:
    """Convert method name to RoundMethod; ValueError for unknown names."""
    if isinstance(method, RoundMethod):
        return method
    try:
        return RoundMethod(method)
    except ValueError:
        known = ', '.join(m.value for m in RoundMethod)
        raise ValueError(f"Unknown round method: {method!r}; known: {known}") from None


def divide(a: int, b: int, method: RoundMethod | str = RoundMethod.TO_ZERO) -> int:
    """Quotient a/b rounded to an integer by given method."""
    rule = _RULES[get_round_method(method)]
    if b == 0:
        raise DivisionByZero(f"Integer division of {a} by zero")
    negative = (a < 0) != (b < 0)
    q, r = divmod(abs(a), abs(b))
    if r:
        twice = 2 * r
        half = (twice > abs(b)) - (twice < abs(b))
        if rule(q, half, negative):
            q += 1
    return -q if negative else q


def scale10(a: int, exponent: int, method: RoundMethod | str = RoundMethod.TO_ZERO) -> int:
    """a * 10**exponent; for negative exponent the result is rounded by method."""
    if exponent >= 0:
        return a * 10**exponent
    return divide(a, 10**(-exponent), method)


def digits(a: int) -> int:
    """Number of decimal digits in |a|; digits(0) == 1."""
    a = abs(a)
    if a == 0:
        return 1
    # estimate from bit length is exact or off by one
    count = int((a.bit_length() - 1) * _LOG10_2) + 1
    if a >= 10**count:
        count += 1
    elif a < 10**(count - 1):
        count -= 1
    return count
