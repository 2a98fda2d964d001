from __future__ import annotations
import math
from decimal import Context, Decimal, ROUND_HALF_UP
from numbers import Integral, Real
from typing import Any

from boundednumbers.functions import clamp01, cyclic_wrap_float

_WIDE = Context(prec=64)


def is_unset(value: Any) -> bool:
    """``None`` and NaN both mean "no value"."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def is_set(value: Any) -> bool:
    return not is_unset(value)


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_negative(n: float) -> bool:
    """True for negative numbers, including ``-0.0``."""
    if n is None:
        return False
    return n < 0 or (n == 0 and math.copysign(1.0, n) < 0)


def is_negative0(n: float) -> bool:
    if n is None:
        return False
    return n == 0 and math.copysign(1.0, n) < 0


def same_value(a: Any, b: Any) -> bool:
    """
    Strict identity of two property values.

    ``0`` and ``-0.0`` are different values, NaN equals NaN and booleans are
    never equal to numbers.
    """
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if is_number(a) and is_number(b):
        if a != a and b != b:
            return True
        if a == 0 and b == 0:
            return is_negative0(a) == is_negative0(b)
        return a == b
    if a is None or b is None:
        return False
    return bool(a == b)


def _to_decimal(a: Real) -> Decimal:
    if isinstance(a, Integral):
        return Decimal(int(a))
    # shortest representation, not the exact binary expansion
    return Decimal(repr(float(a)))


def decimal_precision(a: Real) -> int:
    """Number of fractional digits needed to write ``a`` exactly (0 for integers)."""
    if not a or not math.isfinite(a):
        return 0
    exponent = _to_decimal(a).as_tuple().exponent
    return max(0, -exponent)


def safe_add(a: Real, b: Real) -> float:
    """Add two numbers the way they would be added by hand, without binary drift."""
    decimal = max(decimal_precision(a), decimal_precision(b))
    if decimal == 0 or not (math.isfinite(a) and math.isfinite(b)):
        return a + b
    whole = int(_to_decimal(a).scaleb(decimal)) + int(_to_decimal(b).scaleb(decimal))
    return float(Decimal(whole).scaleb(-decimal))


def safe_mult(a: Real, b: Real) -> float:
    """Multiply two numbers as integers scaled by their decimal precision."""
    decimal_a = decimal_precision(a)
    decimal_b = decimal_precision(b)
    decimal = decimal_a + decimal_b
    if decimal == 0 or not (math.isfinite(a) and math.isfinite(b)):
        return a * b
    negative = is_negative(a) != is_negative(b)
    whole = int(abs(_to_decimal(a)).scaleb(decimal_a)) * int(abs(_to_decimal(b)).scaleb(decimal_b))
    result = float(Decimal(whole).scaleb(-decimal))
    return -result if negative else result


def math_mod(dividend: Real, divisor: Real) -> Real:
    """Mathematical modulo: the result lies in ``[0, divisor)`` for any sign of ``dividend``."""
    result = cyclic_wrap_float(dividend, 0, divisor)
    # tiny negative dividends round up to the divisor
    if result >= divisor:
        return result - divisor
    return result


def normalized_clamp(n: Real) -> Real:
    """Clamp to ``[0, 1]``; NaN passes through."""
    return clamp01(n)


def round_half_up(x: Real) -> Real:
    """Round to the nearest integer, ties towards positive infinity."""
    if not math.isfinite(x):
        return x
    return math.floor(x + 0.5)


def to_fixed(x: Real, digits: int = 0) -> float:
    """Round ``x`` to ``digits`` fractional digits using its exact binary value, ties away from zero."""
    if not math.isfinite(x) or abs(x) >= 1e21:
        return x
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP, context=_WIDE))


def format_number(x: Real) -> str:
    """Shortest textual form of a number: ``1.0 -> "1"``, ``-0.0 -> "0"``, ``0.5 -> "0.5"``."""
    if isinstance(x, Integral):
        return str(int(x))
    if math.isfinite(x) and float(x).is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(float(x))
