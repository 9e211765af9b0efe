"""Filter stage for aged metrics.

Each active criterion is an independent predicate; a payment is kept
only if it passes all of them.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from pydantic import BaseModel, Field

from paydash.metrics.buckets import AgeUnit, age_in_unit
from paydash.payments.models import PaymentRecord


logger = logging.getLogger(__name__)

ALL = "all"

# Date filter tokens that exclude payments older than N whole days.
# Any other token leaves the set unchanged.
DATE_FILTER_MAX_DAYS = {
    "last_7_days": 7,
    "last_28_days": 28,
    "last_30_days": 30,
}


class FilterCriteria(BaseModel):
    """Per-request filter criteria. Absent or "all" disables a criterion."""

    order_type: Optional[str] = Field(default=None, description="Order type (case-insensitive)")
    payment_method: Optional[str] = Field(default=None, description="Payment method token")
    payment_state: Optional[str] = Field(default=None, description="Payment state token")
    date_filter: Optional[str] = Field(default=None, description="Recency token, e.g. last_7_days")


def is_active(value: Optional[str]) -> bool:
    return value is not None and value != ALL


def normalize_token(value: str) -> str:
    """Lower-case and drop `_` separators: CREDIT_CARD -> creditcard."""
    return value.lower().replace("_", "")


def tokens_match(enum_value: str, requested: str) -> bool:
    """Compare an enumerated value with a caller-supplied free-text token."""
    return normalize_token(enum_value) == normalize_token(requested)


def _date_predicate(date_filter: str, now: datetime) -> Optional[Callable[[PaymentRecord], bool]]:
    max_days = DATE_FILTER_MAX_DAYS.get(date_filter)
    if max_days is None:
        return None
    return lambda p: age_in_unit(p.created_at, now, AgeUnit.DAYS) <= max_days


def build_predicates(
    criteria: FilterCriteria,
    now: datetime,
) -> List[Callable[[PaymentRecord], bool]]:
    """Build the list of active predicates for a set of criteria."""
    predicates: List[Callable[[PaymentRecord], bool]] = []

    if is_active(criteria.date_filter):
        date_predicate = _date_predicate(criteria.date_filter, now)
        if date_predicate is not None:
            predicates.append(date_predicate)

    if is_active(criteria.order_type):
        order_type = criteria.order_type.lower()
        # Payments without an order type cannot be excluded by this filter
        predicates.append(
            lambda p: p.order_type is None or p.order_type.lower() == order_type
        )

    if is_active(criteria.payment_method):
        method = criteria.payment_method
        predicates.append(lambda p: tokens_match(p.payment_method.value, method))

    if is_active(criteria.payment_state):
        state = criteria.payment_state
        predicates.append(lambda p: tokens_match(p.status.value, state))

    return predicates


def filter_payments(
    payments: Iterable[PaymentRecord],
    criteria: FilterCriteria,
    now: datetime,
) -> List[PaymentRecord]:
    """
    Apply filter criteria to a snapshot of payments.

    Args:
        payments: Snapshot of payment records
        criteria: Filter criteria for this request
        now: Reference time for the date filter

    Returns:
        Payments passing every active filter, in input order
    """
    predicates = build_predicates(criteria, now)
    filtered = [p for p in payments if all(check(p) for check in predicates)]

    logger.debug(f"Filter stage: {len(predicates)} active filters, {len(filtered)} payments kept")
    return filtered
