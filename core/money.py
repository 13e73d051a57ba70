"""
money.py
---------
Shared numeric helpers. Every rounding decision in the engine goes through
round2() so that repeated calculations over the same inputs agree to the cent.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from numbers import Real
from typing import Any, Optional

CENT = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round to 2 decimals, half away from zero (0.005 -> 0.01, -0.005 -> -0.01).

    The float is converted through its shortest repr so that 1.005 rounds
    as written rather than as its binary approximation. Non-finite input
    returns 0.0. Precision grows with the magnitude so large amounts never
    overflow the decimal context.
    """
    if not math.isfinite(value):
        return 0.0
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 4)
        return float(exact.quantize(CENT, rounding=ROUND_HALF_UP))


def is_finite_number(value: Any) -> bool:
    """True for real, finite, non-boolean numbers."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def coerce_amount(value: Any) -> float:
    """
    Returns value as a finite float, or 0.0 for anything unusable.

    None, NaN, +/-inf, booleans and non-numeric objects all map to 0.0.
    Strings are not parsed here; locale-aware parsing happens upstream.
    """
    if not is_finite_number(value):
        return 0.0
    return float(value)


def usable_rate(rate: Any) -> Optional[float]:
    """Returns the exchange rate if positive and finite, otherwise None."""
    rate = coerce_amount(rate)
    return rate if rate > 0 else None


def format_amount(value: float) -> str:
    """Two-decimal rendering used in user-facing messages."""
    return f"{round2(value):.2f}"
