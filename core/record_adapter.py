"""
record_adapter.py
------------------
Projects the persisted four-slot payment record into PaymentEntry values.

Note the zero-total convention on this path: a stored case with a billed
total of 0 needs no payment and is reported as Paid. The calculator, called
directly, reports the same input as unset (status None). Both conventions
are relied on by callers and are kept apart on purpose.
"""

import math
from typing import Any

from core.currency import CurrencyClassifier, normalize_method
from core.models import (
    DenormalizedPaymentRecord,
    PaymentEntry,
    PaymentStatus,
    ReconciliationResult,
)
from core.money import coerce_amount, usable_rate
from core.reconciliation import reconcile


def from_denormalized_record(record: DenormalizedPaymentRecord) -> list[PaymentEntry]:
    """
    Returns the populated slots, in slot order 1 → 4.

    A slot is kept only when it has a method and a positive amount. The
    reference is carried through unchanged ('' when absent).
    """
    entries: list[PaymentEntry] = []
    for method, amount, reference in record.slots():
        if not normalize_method(method):
            continue
        amount = coerce_amount(amount)
        if amount <= 0:
            continue
        entries.append(
            PaymentEntry(
                method=method,
                amount=amount,
                reference=_reference_text(reference),
            )
        )
    return entries


def _reference_text(reference: Any) -> str:
    """Reference as text. None and NaN (empty CSV cells) become ''."""
    if reference is None or (isinstance(reference, float) and math.isnan(reference)):
        return ""
    return str(reference)


def reconcile_record(
    record: DenormalizedPaymentRecord, classifier: CurrencyClassifier
) -> ReconciliationResult:
    """Reconciles a stored case. A billed total of 0 is treated as Paid."""
    billed = coerce_amount(record.total_amount)
    if billed == 0:
        return ReconciliationResult(
            status=PaymentStatus.PAID, is_complete=True, missing_amount=0.0
        )

    return reconcile(
        from_denormalized_record(record),
        billed,
        usable_rate(record.exchange_rate),
        classifier,
    )
