"""
validation.py
--------------
Submission-time check. The calculator treats any overpayment as simply
"Paid"; a new submission must instead be rejected when it exceeds the
billed total by more than one cent, before anything is persisted.
"""

import logging
from typing import Any, Iterable

from core.currency import CurrencyClassifier
from core.models import PaymentEntry, ValidationResult
from core.money import coerce_amount, format_amount
from core.normalizer import is_inert
from core.reconciliation import total_paid_base

logger = logging.getLogger(__name__)

# One base-currency cent. Absorbs conversion rounding noise.
OVERPAYMENT_TOLERANCE = 0.01


def validate_submission(
    entries: Iterable[PaymentEntry],
    billed_total: Any,
    rate: Any,
    classifier: CurrencyClassifier,
) -> ValidationResult:
    """
    Reject submissions that pay more than the billed total.

    Local-currency entries without a usable rate contribute 0, as in the
    calculator. Returns a structured result; never raises.
    """
    usable = [entry for entry in entries if not is_inert(entry)]
    if not usable:
        return ValidationResult(is_valid=True, total_paid_base=0.0)

    billed = coerce_amount(billed_total)
    paid = total_paid_base(usable, rate, classifier)
    difference = paid - billed

    if difference > OVERPAYMENT_TOLERANCE:
        message = (
            f"Total paid ({format_amount(paid)}) exceeds the billed total "
            f"({format_amount(billed)}) by {format_amount(difference)}"
        )
        logger.debug(f"Submission rejected: {message}")
        return ValidationResult(is_valid=False, total_paid_base=paid, error_message=message)

    return ValidationResult(is_valid=True, total_paid_base=paid)
