"""
normalizer.py
--------------
Converts a single PaymentEntry into a base-currency amount.

A local-currency entry with no usable exchange rate contributes 0. The case
then stays Incomplete until a rate is available, instead of being valued
with a guess.
"""

import logging
import math
from typing import Any, Optional

from core.currency import CurrencyClassifier, normalize_method
from core.models import CurrencyClass, PaymentEntry
from core.money import coerce_amount, is_finite_number, round2, usable_rate

logger = logging.getLogger(__name__)


def is_inert(entry: PaymentEntry) -> bool:
    """An entry without a method or without a positive, finite amount."""
    return not normalize_method(entry.method) or coerce_amount(entry.amount) <= 0


def to_base_currency(
    entry: PaymentEntry, rate: Any, classifier: CurrencyClassifier
) -> float:
    """
    Value of one entry in base currency. Unrounded.

    Args:
        entry: The payment line.
        rate: Local-currency units per base-currency unit. None, zero,
            negative or non-finite means "rate unavailable".
        classifier: Method table used to decide the entry's currency.
    """
    if is_inert(entry):
        return 0.0

    amount = coerce_amount(entry.amount)
    if classifier.classify(entry.method) is CurrencyClass.BASE:
        return amount

    rate = usable_rate(rate)
    if rate is None:
        logger.debug(
            f"No usable exchange rate; local-currency payment '{entry.method}' "
            f"of {amount} not counted."
        )
        return 0.0

    converted = amount / rate
    # A tiny rate can push the quotient past the float range
    return converted if math.isfinite(converted) else 0.0


def from_base_currency(amount: Any, rate: Any) -> Optional[float]:
    """
    Base-currency amount expressed in local currency, rounded to the cent.

    Returns None when the rate is unavailable or the amount is not a finite
    number.
    """
    rate = usable_rate(rate)
    if rate is None or not is_finite_number(amount):
        return None
    converted = float(amount) * rate
    if not math.isfinite(converted):
        return None
    return round2(converted)
