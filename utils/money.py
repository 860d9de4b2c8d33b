from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
import math

def safe_div(a: float, b: float) -> float:
    if b == 0:
        return 0.0
    return a / b

def _dec(x) -> Decimal:
    # str() gives the shortest repr, so 0.7 becomes Decimal("0.7") and not its binary expansion.
    return x if isinstance(x, Decimal) else Decimal(str(x))

def round_half_up(x) -> int:
    """Round to the nearest whole currency unit, halves going up."""
    return int(_dec(x).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def scale_half_up(value, factor, divisor=1) -> int:
    """
    round_half_up(value * factor / divisor), with the arithmetic done in Decimal
    so an exact tie like 45 * 0.7 = 31.5 is not turned into 31.499999999999996
    by float multiplication first.
    """
    return round_half_up(_dec(value) * _dec(factor) / _dec(divisor))

def is_positive_number(x) -> bool:
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        return False
    return math.isfinite(x) and x > 0
