"""
reconciliation.py
------------------
Reconciliation calculator. Decides whether a billed case has been paid.

Algorithm:
    1. A billed total of 0 means "nothing billed yet": no status is computed.
    2. Sum every entry's base-currency value (see normalizer).
    3. Round the sum to the cent with round2().
    4. Paid if the rounded sum covers the billed total. Otherwise the missing
       amount is round2(billed - paid); a remainder that rounds to 0 still
       counts as Paid.

Never raises. Malformed amounts are inert.
"""

import math
from typing import Any, Iterable

from core.currency import CurrencyClassifier
from core.models import PaymentEntry, PaymentStatus, ReconciliationResult
from core.money import coerce_amount, round2
from core.normalizer import is_inert, to_base_currency


def total_paid_base(
    entries: Iterable[PaymentEntry], rate: Any, classifier: CurrencyClassifier
) -> float:
    """
    Raw (unrounded) base-currency total of all usable entries.

    A sum that overflows the float range is reported as 0.
    """
    total = sum(
        (to_base_currency(entry, rate, classifier) for entry in entries if not is_inert(entry)),
        0.0,
    )
    return total if math.isfinite(total) else 0.0


def reconcile(
    entries: Iterable[PaymentEntry],
    billed_total: Any,
    rate: Any,
    classifier: CurrencyClassifier,
) -> ReconciliationResult:
    """
    Compare what was paid against what was billed.

    Args:
        entries: Payment lines; inert lines are ignored.
        billed_total: Amount billed, in base currency. 0 is the "not billed"
            sentinel. Non-numeric or non-finite values are treated as 0.
        rate: Local-currency units per base-currency unit, or None.
        classifier: Method table used to decide each entry's currency.

    Returns:
        ReconciliationResult with status None only for the 0 sentinel.
    """
    billed = coerce_amount(billed_total)
    if billed == 0:
        return ReconciliationResult(status=None, is_complete=False, missing_amount=0.0)

    paid = round2(total_paid_base(entries, rate, classifier))

    if paid >= billed:
        return _paid()

    missing = round2(billed - paid)
    if missing == 0:
        # Sub-cent remainder
        return _paid()

    return ReconciliationResult(
        status=PaymentStatus.INCOMPLETE, is_complete=False, missing_amount=missing
    )


def is_payment_total_valid(
    entries: Iterable[PaymentEntry],
    billed_total: Any,
    rate: Any,
    classifier: CurrencyClassifier,
) -> bool:
    """True when nothing is owed (billed <= 0) or the payments cover the total."""
    if coerce_amount(billed_total) <= 0:
        return True
    return reconcile(entries, billed_total, rate, classifier).is_complete


def _paid() -> ReconciliationResult:
    return ReconciliationResult(status=PaymentStatus.PAID, is_complete=True, missing_amount=0.0)
