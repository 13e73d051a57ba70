"""
main.py
--------
Entry point for the case payment reconciliation report.

Reads stored cases from a CSV export (storage column names), reconciles
every case and writes a per-case payment status report to the outputs/
folder.

Usage (from the project root):
    python main.py --input path/to/cases.csv

    # With optional arguments:
    python main.py --input cases.csv --status Incomplete
    python main.py --input cases.csv --config path/to/config.yaml
"""

import sys
import os
import argparse
import logging
import pandas as pd
from datetime import datetime

# Ensure project root is on path (for runs from any working directory)
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from config.config_loader import get_currency_labels, load_config, reset_config
from core.models import PaymentStatus, RevenueSummary
from pipeline import CaseReconciliationPipeline


# =============================================================================
# LOGGING SETUP
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("main")


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Case Payment Reconciliation: report payment status for stored cases."
    )
    parser.add_argument(
        "--input", type=str, default=None,
        help="Path to input cases CSV. Defaults to cases.csv in project root."
    )
    parser.add_argument(
        "--status", type=str, default=None,
        choices=[s.value for s in PaymentStatus],
        help="Only include cases with this payment status. Default: all cases."
    )
    parser.add_argument(
        "--output-dir", type=str, default=None,
        help="Output directory. Defaults to outputs/ in project root."
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to config.yaml. Defaults to config/config.yaml."
    )
    return parser.parse_args(argv)


# =============================================================================
# MAIN
# =============================================================================

def main(argv: list[str] | None = None):
    args = parse_args(argv)

    # --- Resolve paths ---
    input_path = args.input or os.path.join(PROJECT_ROOT, "cases.csv")
    output_dir = args.output_dir or os.path.join(PROJECT_ROOT, "outputs")

    if args.config:
        reset_config()
    load_config(args.config)

    # --- Load cases ---
    logger.info(f"Loading cases from: {input_path}")
    if not os.path.exists(input_path):
        logger.error(f"Input file not found: {input_path}")
        sys.exit(1)

    cases = pd.read_csv(input_path)
    logger.info(f"Loaded {len(cases):,} cases.")

    # --- Run pipeline ---
    pipeline = CaseReconciliationPipeline()
    report = pipeline.run(cases)

    if args.status:
        filtered = report[report["payment_status"] == args.status].copy()
        logger.info(
            f"After filtering (status == {args.status}): {len(filtered):,} cases. "
            f"Filtered out: {len(report) - len(filtered):,}."
        )
    else:
        filtered = report

    # --- Output ---
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_path = os.path.join(output_dir, f"payment_status_{timestamp}.csv")
    filtered.to_csv(report_path, index=False)
    logger.info(f"Payment status report saved to: {report_path}")

    _print_summary(pipeline.summarize(cases))
    return report_path


def _print_summary(summary: RevenueSummary):
    """Prints a clean summary table to the console."""
    labels = get_currency_labels()
    base, local = labels["base"], labels["local"]

    print("\n" + "=" * 80)
    print("  PAYMENT RECONCILIATION SUMMARY")
    print("=" * 80)

    print(f"\n  Cases: {summary.case_count:,}")
    print("  " + "-" * 60)
    print(f"    {'Paid':20s}  {summary.paid_count:>7,}  (of which not billed: {summary.unbilled_count:,})")
    print(f"    {'Incomplete':20s}  {summary.incomplete_count:>7,}")

    print("\n  Amounts:")
    print("  " + "-" * 60)
    print(f"    {'Total billed':20s}  {summary.total_billed:>14,.2f} {base}")
    print(f"    {'Pending billed':20s}  {summary.pending_billed:>14,.2f} {base}")
    print(f"    {'Revenue':20s}  {summary.revenue_base:>14,.2f} {base}")
    print(f"    {'Revenue':20s}  {summary.revenue_local:>14,.2f} {local}")
    print("=" * 80 + "\n")


if __name__ == "__main__":
    main()
