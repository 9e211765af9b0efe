"""In-memory payment store."""

import logging
import threading
import uuid
from datetime import datetime, timedelta, UTC
from typing import Dict, List, Optional

from paydash.payments.models import PaymentCreate, PaymentRecord, PaymentStatus


logger = logging.getLogger(__name__)


class PaymentNotFoundError(Exception):
    """Raised when a payment id is not present in the store."""

    def __init__(self, payment_id: int):
        self.payment_id = payment_id
        super().__init__(f"Payment not found with id: {payment_id}")


def generate_transaction_id() -> str:
    """Generate a gateway-style transaction reference (TXN + 16 hex chars)."""
    return "TXN" + uuid.uuid4().hex[:16].upper()


class PaymentStore:
    """
    Payment repository held in process memory.

    Records are never mutated in place: status updates swap in a copy,
    so a snapshot returned by `list_all_payments()` stays stable while
    a report is being computed from it.
    """

    def __init__(self):
        self._payments: Dict[int, PaymentRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def save(self, record: PaymentRecord) -> PaymentRecord:
        """Insert a record as-is, assigning an id when it has none."""
        with self._lock:
            if record.id is None:
                record = record.model_copy(update={"id": self._next_id})
            self._next_id = max(self._next_id, record.id + 1)
            self._payments[record.id] = record
        return record

    def create(self, payload: PaymentCreate, now: Optional[datetime] = None) -> PaymentRecord:
        """
        Create a new payment.

        The store owns the transaction id, creation time and initial status.
        """
        created = PaymentRecord(
            **payload.model_dump(),
            transaction_id=generate_transaction_id(),
            created_at=now or datetime.now(UTC),
            status=PaymentStatus.PENDING,
        )
        created = self.save(created)
        logger.info(f"Created payment {created.id} ({created.transaction_id})")
        return created

    def update_status(
        self,
        payment_id: int,
        status: PaymentStatus,
        error_message: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PaymentRecord:
        """
        Change a payment's status.

        Raises:
            PaymentNotFoundError: If no payment has this id
        """
        with self._lock:
            current = self._payments.get(payment_id)
            if current is None:
                raise PaymentNotFoundError(payment_id)

            changes = {"status": status, "updated_at": now or datetime.now(UTC)}
            if error_message is not None:
                changes["error_message"] = error_message

            updated = current.model_copy(update=changes)
            self._payments[payment_id] = updated

        logger.info(f"Payment {payment_id} status -> {status.value}")
        return updated

    def get(self, payment_id: int) -> Optional[PaymentRecord]:
        return self._payments.get(payment_id)

    def list_all_payments(self) -> List[PaymentRecord]:
        """All payments, newest first (id breaks ties)."""
        with self._lock:
            payments = list(self._payments.values())
        return sorted(payments, key=lambda p: (p.created_at, p.id), reverse=True)

    def list_by_status(self, status: PaymentStatus) -> List[PaymentRecord]:
        return [p for p in self.list_all_payments() if p.status == status]

    def list_recent(self, hours: int, now: Optional[datetime] = None) -> List[PaymentRecord]:
        """Payments created within the last `hours` hours, newest first."""
        since = (now or datetime.now(UTC)) - timedelta(hours=hours)
        return [p for p in self.list_all_payments() if p.created_at >= since]

    def count(self) -> int:
        return len(self._payments)

    def clear(self) -> None:
        with self._lock:
            self._payments.clear()
            self._next_id = 1
