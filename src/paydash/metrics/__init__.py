"""Aged-metrics engine: filter, bucket and aggregate payments by age."""

from paydash.metrics.buckets import (
    AgeGroupSpec,
    AgeUnit,
    Frequency,
    bucket_count,
    build_age_groups,
    age_in_unit,
)
from paydash.metrics.filters import FilterCriteria, filter_payments, normalize_token
from paydash.metrics.models import (
    AgedBucket,
    AgedMetricsReport,
    ReportTotal,
    TransactionView,
    format_currency,
    format_enum_value,
)
from paydash.metrics.engine import AgedMetricsEngine, aggregate

__all__ = [
    "AgeGroupSpec",
    "AgeUnit",
    "Frequency",
    "bucket_count",
    "build_age_groups",
    "age_in_unit",
    "FilterCriteria",
    "filter_payments",
    "normalize_token",
    "AgedBucket",
    "AgedMetricsReport",
    "ReportTotal",
    "TransactionView",
    "format_currency",
    "format_enum_value",
    "AgedMetricsEngine",
    "aggregate",
]
