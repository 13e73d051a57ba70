"""
models.py
----------
Core domain models. These are the typed contracts between engine layers.

- PaymentEntry: One line of payment as collected by the form layer.
  Method and amount may be empty; such entries are inert.

- DenormalizedPaymentRecord: The persisted shape of a case. Four independent
  (method, amount, reference) slots plus the billed total and the exchange
  rate captured at billing time.

- ReconciliationResult / ValidationResult: Outputs of the calculator and of
  the submission validator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

PAYMENT_SLOT_COUNT = 4


class CurrencyClass(str, Enum):
    """Currency a payment method is denominated in."""

    BASE = "base"
    LOCAL = "local"


class PaymentStatus(str, Enum):
    INCOMPLETE = "Incomplete"
    PAID = "Paid"


@dataclass(frozen=True)
class PaymentEntry:
    method: Optional[str] = None
    amount: Optional[float] = None
    reference: str = ""              # Carried through, never used in calculation.


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Calculator output.

    status is None only when the billed total is the 0 sentinel
    ("nothing billed yet").
    """

    status: Optional[PaymentStatus]
    is_complete: bool
    missing_amount: float            # Always >= 0, exactly 0 when complete.


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    total_paid_base: float
    error_message: Optional[str] = None


@dataclass(frozen=True)
class DenormalizedPaymentRecord:
    """
    Persisted form of a case's payments.

    Field names match the storage columns so rows can be mapped straight in
    with from_mapping().
    """

    total_amount: Optional[float] = None
    exchange_rate: Optional[float] = None

    payment_method_1: Optional[str] = None
    payment_amount_1: Optional[float] = None
    payment_reference_1: Optional[str] = None

    payment_method_2: Optional[str] = None
    payment_amount_2: Optional[float] = None
    payment_reference_2: Optional[str] = None

    payment_method_3: Optional[str] = None
    payment_amount_3: Optional[float] = None
    payment_reference_3: Optional[str] = None

    payment_method_4: Optional[str] = None
    payment_amount_4: Optional[float] = None
    payment_reference_4: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "DenormalizedPaymentRecord":
        """Builds a record from a dict-like row. Unknown keys are ignored."""
        values = {name: row[name] for name in cls.__dataclass_fields__ if name in row}
        return cls(**values)

    def slots(self) -> Iterator[tuple[Any, Any, Any]]:
        """Yields (method, amount, reference) for slots 1 through 4, in order."""
        for i in range(1, PAYMENT_SLOT_COUNT + 1):
            yield (
                getattr(self, f"payment_method_{i}"),
                getattr(self, f"payment_amount_{i}"),
                getattr(self, f"payment_reference_{i}"),
            )


@dataclass
class RevenueSummary:
    """Aggregate figures over a batch of cases, used for reporting."""

    case_count: int
    paid_count: int
    incomplete_count: int
    unbilled_count: int
    total_billed: float
    pending_billed: float            # Billed totals of cases not yet Paid.
    revenue_base: float              # Base-currency method amounts, as paid.
    revenue_local: float             # Local-currency method amounts, unconverted.
