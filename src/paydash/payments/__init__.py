"""Payment records, storage and sample data."""

from paydash.payments.models import (
    PaymentRecord,
    PaymentCreate,
    PaymentMethod,
    PaymentStatus,
    PaymentStatistics,
)
from paydash.payments.store import PaymentStore, PaymentNotFoundError
from paydash.payments.validator import SnapshotValidator, DataIntegrityError

__all__ = [
    "PaymentRecord",
    "PaymentCreate",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentStatistics",
    "PaymentStore",
    "PaymentNotFoundError",
    "SnapshotValidator",
    "DataIntegrityError",
]
