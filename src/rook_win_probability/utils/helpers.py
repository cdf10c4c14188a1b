"""Numeric helpers shared by the estimators."""

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    Unlike the built-in ``round``, 2.5 becomes 3 and -2.5 becomes -2.
    """
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round a percentage to one decimal place, ties away from zero.

    Works on the exact binary value of the float so 12.25 becomes 12.3.
    NaN and infinities are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return min(max(value, lower), upper)
