"""Aged Metrics Engine - buckets payments by age and aggregates them."""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from paydash.metrics.buckets import AgeGroupSpec, build_age_groups, age_in_unit, ensure_utc
from paydash.metrics.filters import FilterCriteria, filter_payments
from paydash.metrics.models import AgedBucket, AgedMetricsReport, ReportTotal, TransactionView
from paydash.payments.models import PaymentRecord
from paydash.payments.validator import SnapshotValidator


logger = logging.getLogger(__name__)


def aggregate(
    payments: List[PaymentRecord],
    age_groups: List[AgeGroupSpec],
    now: datetime,
) -> AgedMetricsReport:
    """
    Aggregate filtered payments into age groups.

    Args:
        payments: Filtered payments
        age_groups: Ordered age groups
        now: Reference time ages are measured from

    Returns:
        AgedMetricsReport with one item per age group and a grand total
    """
    items: List[AgedBucket] = []

    for group in age_groups:
        members = [
            p for p in payments
            if group.contains(age_in_unit(p.created_at, now, group.unit))
        ]
        items.append(AgedBucket(
            label=group.label,
            count=len(members),
            amount=sum((p.amount for p in members), Decimal("0")),
            transactions=[TransactionView.from_payment(p) for p in members],
        ))

    total = ReportTotal(
        count=len(payments),
        amount=sum((p.amount for p in payments), Decimal("0")),
    )

    return AgedMetricsReport(items=items, total=total)


class AgedMetricsEngine:
    """
    Aged Metrics Engine

    Pure, synchronous transform of a payment snapshot into a report:
    1. Validate the snapshot (missing createdAt/amount fails the request)
    2. Filter stage (date recency, order type, method, state)
    3. Derive age groups from frequency and date filter
    4. Bucket and aggregate, plus a grand total over the filtered set

    Holds no state between calls; concurrent requests only need their
    own snapshot.
    """

    def __init__(self, validator: Optional[SnapshotValidator] = None):
        self.validator = validator or SnapshotValidator()

    def generate_report(
        self,
        payments: Iterable[Union[PaymentRecord, Dict[str, Any]]],
        criteria: Optional[FilterCriteria] = None,
        frequency: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AgedMetricsReport:
        """
        Build an aged-metrics report.

        Args:
            payments: Full snapshot of payments (records or raw mappings)
            criteria: Filter criteria (none means no filtering)
            frequency: hourly, daily, weekly or monthly (default daily)
            now: Reference time (default: current UTC time)

        Returns:
            AgedMetricsReport

        Raises:
            DataIntegrityError: If a payment lacks createdAt or amount
        """
        criteria = criteria or FilterCriteria()
        now = ensure_utc(now) if now is not None else datetime.now(UTC)

        snapshot = self.validator.validate(payments)
        filtered = filter_payments(snapshot, criteria, now)
        age_groups = build_age_groups(criteria.date_filter, frequency)

        report = aggregate(filtered, age_groups, now)

        bucketed = sum(item.count for item in report.items)
        logger.info(
            f"Aged metrics: {len(snapshot)} payments, {len(filtered)} after filters, "
            f"{len(age_groups)} buckets ({bucketed} itemised)"
        )
        return report
