"""
PayDash Report CLI

Prints an aged-metrics report for sample payment data.

Usage:
    paydash-report
    paydash-report --frequency weekly --date-filter last_90_days
    paydash-report --payment-method credit_card --seed 42
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from paydash.metrics import AgedMetricsReport, format_currency
from paydash.payments.service import PaymentService


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print an aged-metrics report for sample payments")
    parser.add_argument("--frequency", default="daily", help="hourly, daily, weekly or monthly")
    parser.add_argument("--date-filter", default=None, help="e.g. last_7_days, last_30_days, last_90_days")
    parser.add_argument("--order-type", default=None)
    parser.add_argument("--payment-method", default=None)
    parser.add_argument("--payment-state", default=None)
    parser.add_argument("--count", type=int, default=200, help="Number of sample payments")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible sample data")
    return parser.parse_args(argv)


def print_report(report: AgedMetricsReport) -> None:
    """Print the report as a table."""
    print("\n" + "=" * 44)
    print(f"  {'Age':<16}{'Count':>10}{'Amount':>16}")
    print("=" * 44)
    for item in report.items:
        print(f"  {item.label:<16}{item.count:>10}{format_currency(item.amount):>16}")
    print("-" * 44)
    print(f"  {'Total':<16}{report.total.count:>10}{format_currency(report.total.amount):>16}")
    print("=" * 44 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    load_dotenv()
    args = parse_args(argv)

    service = PaymentService()
    service.generate_sample_data(count=args.count, seed=args.seed)

    report = service.get_aged_metrics(
        order_type=args.order_type,
        payment_method=args.payment_method,
        payment_state=args.payment_state,
        date_filter=args.date_filter,
        frequency=args.frequency,
    )
    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
