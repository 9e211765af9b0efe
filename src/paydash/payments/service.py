"""
Payment Service

Read-side operations the dashboard needs on top of the store:
headline statistics, dropdown catalogues and aged-metrics reports.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from paydash.metrics import AgedMetricsEngine, AgedMetricsReport, FilterCriteria, format_enum_value
from paydash.payments.mock_data import ORDER_TYPES, seed_store
from paydash.payments.models import (
    FilterOption,
    PaymentMethod,
    PaymentRecord,
    PaymentStatistics,
    PaymentStatus,
)
from paydash.payments.store import PaymentStore


logger = logging.getLogger(__name__)

# Statuses not offered as dashboard filters
HIDDEN_STATUS_FILTERS = {PaymentStatus.REFUNDED, PaymentStatus.COMPLETED}


def compute_statistics(payments: Iterable[PaymentRecord]) -> PaymentStatistics:
    """Headline counts, amounts and success rate for a set of payments."""
    payments = list(payments)
    total = len(payments)

    def count_of(status: PaymentStatus) -> int:
        return sum(1 for p in payments if p.status == status)

    completed = count_of(PaymentStatus.COMPLETED)
    total_amount = sum((p.amount for p in payments), Decimal("0"))
    completed_amount = sum(
        (p.amount for p in payments if p.status == PaymentStatus.COMPLETED),
        Decimal("0"),
    )

    return PaymentStatistics(
        total_payments=total,
        completed_payments=completed,
        pending_payments=count_of(PaymentStatus.PENDING),
        failed_payments=count_of(PaymentStatus.FAILED),
        refunded_payments=count_of(PaymentStatus.REFUNDED),
        total_amount=float(total_amount),
        completed_amount=float(completed_amount),
        success_rate=(completed * 100.0) / total if total else 0.0,
        average_transaction_amount=float(total_amount) / total if total else 0.0,
    )


class PaymentService:
    """Service backing the dashboard endpoints."""

    def __init__(
        self,
        store: Optional[PaymentStore] = None,
        engine: Optional[AgedMetricsEngine] = None,
    ):
        self.store = store or PaymentStore()
        self.engine = engine or AgedMetricsEngine()

    def get_statistics(self) -> PaymentStatistics:
        return compute_statistics(self.store.list_all_payments())

    def get_aged_metrics(
        self,
        order_type: Optional[str] = None,
        payment_method: Optional[str] = None,
        payment_state: Optional[str] = None,
        date_filter: Optional[str] = None,
        frequency: str = "daily",
        now: Optional[datetime] = None,
    ) -> AgedMetricsReport:
        """
        Build an aged-metrics report over the whole store.

        The entire dataset is read once per request; filters are applied
        by the engine, not pushed down to the store.
        """
        criteria = FilterCriteria(
            order_type=order_type,
            payment_method=payment_method,
            payment_state=payment_state,
            date_filter=date_filter,
        )
        snapshot = self.store.list_all_payments()
        return self.engine.generate_report(snapshot, criteria, frequency=frequency, now=now)

    def generate_sample_data(
        self,
        count: int = 200,
        now: Optional[datetime] = None,
        seed: Optional[int] = None,
    ) -> int:
        """Seed the store with sample payments if it is empty."""
        added = seed_store(self.store, count=count, now=now, seed=seed)
        if added:
            logger.info(f"Generated {added} sample payments")
        else:
            logger.info("Store already has payments, skipping sample data")
        return added

    @staticmethod
    def payment_status_options() -> List[FilterOption]:
        return [
            FilterOption(value=s.value.lower(), label=format_enum_value(s.value))
            for s in PaymentStatus
            if s not in HIDDEN_STATUS_FILTERS
        ]

    @staticmethod
    def payment_method_options() -> List[FilterOption]:
        return [
            FilterOption(value=m.value.lower(), label=format_enum_value(m.value))
            for m in PaymentMethod
        ]

    @staticmethod
    def order_type_options() -> List[FilterOption]:
        return [FilterOption(value=value, label=label) for value, label in ORDER_TYPES]
