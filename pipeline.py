"""
pipeline.py
------------
Batch orchestration layer. Wires together:
    1. Record mapping      →  DataFrame rows to DenormalizedPaymentRecord
    2. Reconciliation      →  one ReconciliationResult per stored case
    3. Output serialization →  flat, per-case payment status DataFrame

Used for case exports and for the revenue summary. Input rows use the
storage column names (total_amount, exchange_rate, payment_method_1 ...
payment_reference_4).

Usage:
    from pipeline import CaseReconciliationPipeline

    pipeline = CaseReconciliationPipeline()
    status_df = pipeline.run(cases_df)
    summary = pipeline.summarize(cases_df)
"""

import pandas as pd
import logging
from typing import Any, Dict, List

from config.config_loader import get_pipeline_config
from core.currency import CurrencyClassifier
from core.models import CurrencyClass, DenormalizedPaymentRecord, PaymentStatus, RevenueSummary
from core.money import coerce_amount, round2, usable_rate
from core.reconciliation import total_paid_base
from core.record_adapter import from_denormalized_record, reconcile_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["total_amount"]

OUTPUT_COLUMNS = [
    "total_amount", "exchange_rate", "payment_count", "paid_base",
    "payment_status", "is_payment_complete", "missing_amount",
]


class CaseReconciliationPipeline:
    """
    Reconciles a batch of stored cases.

    Follows the stored-record convention: a case billed at 0 is reported
    as Paid.
    """

    def __init__(self, classifier: CurrencyClassifier | None = None, id_column: str | None = None):
        """
        Args:
            classifier: Method table. Defaults to the configured one.
            id_column: Column carried through to the output. Defaults to
                the configured pipeline.id_column.
        """
        self.classifier = classifier or CurrencyClassifier.from_config()
        self.id_column = id_column or get_pipeline_config()["id_column"]

        logger.info(
            f"Pipeline initialized. "
            f"Local-currency methods: {sorted(self.classifier.local_currency_methods)}. "
            f"Id column: {self.id_column}."
        )

    # -------------------------------------------------------------------------
    # PUBLIC INTERFACE
    # -------------------------------------------------------------------------

    def run(self, cases: pd.DataFrame) -> pd.DataFrame:
        """
        Reconcile every case in the DataFrame.

        Returns:
            One row per input case, in input order, with the id column (when
            present) followed by OUTPUT_COLUMNS.
        """
        self._check_columns(cases)
        logger.info(f"Pipeline starting. Input: {len(cases):,} cases.")

        rows = [self._reconcile_row(row) for row in cases.to_dict(orient="records")]
        output_df = self._serialize(rows, include_id=self.id_column in cases.columns)

        paid = int((output_df["payment_status"] == PaymentStatus.PAID.value).sum())
        logger.info(f"Pipeline complete. Paid: {paid:,}. Incomplete: {len(output_df) - paid:,}.")
        return output_df

    def summarize(self, cases: pd.DataFrame) -> RevenueSummary:
        """
        Aggregate billing and revenue figures for a batch of cases.

        Revenue is split by currency class and left unconverted: local
        currency amounts are summed in local currency.
        """
        status_df = self.run(cases)
        billed = cases["total_amount"].map(coerce_amount)
        not_paid = status_df["payment_status"] != PaymentStatus.PAID.value

        revenue_base = 0.0
        revenue_local = 0.0
        for row in cases.to_dict(orient="records"):
            record = DenormalizedPaymentRecord.from_mapping(row)
            for entry in from_denormalized_record(record):
                if self.classifier.classify(entry.method) is CurrencyClass.LOCAL:
                    revenue_local += entry.amount
                else:
                    revenue_base += entry.amount

        return RevenueSummary(
            case_count=len(status_df),
            paid_count=int((~not_paid).sum()),
            incomplete_count=int(not_paid.sum()),
            unbilled_count=int((billed == 0).sum()),
            total_billed=round2(float(billed.sum())),
            pending_billed=round2(float(billed[not_paid.to_numpy()].sum())),
            revenue_base=round2(revenue_base),
            revenue_local=round2(revenue_local),
        )

    # -------------------------------------------------------------------------
    # INTERNAL
    # -------------------------------------------------------------------------

    def _check_columns(self, cases: pd.DataFrame) -> None:
        missing = [c for c in REQUIRED_COLUMNS if c not in cases.columns]
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

    def _reconcile_row(self, row: Dict[str, Any]) -> Dict[str, Any]:
        record = DenormalizedPaymentRecord.from_mapping(row)
        entries = from_denormalized_record(record)
        rate = usable_rate(record.exchange_rate)
        result = reconcile_record(record, self.classifier)

        return {
            self.id_column: row.get(self.id_column),
            "total_amount": coerce_amount(record.total_amount),
            "exchange_rate": rate,
            "payment_count": len(entries),
            "paid_base": round2(total_paid_base(entries, rate, self.classifier)),
            "payment_status": result.status.value if result.status else None,
            "is_payment_complete": result.is_complete,
            "missing_amount": result.missing_amount,
        }

    def _serialize(self, rows: List[Dict[str, Any]], include_id: bool) -> pd.DataFrame:
        columns = ([self.id_column] if include_id else []) + OUTPUT_COLUMNS
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows)[columns]
