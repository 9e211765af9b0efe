"""
Mock Data Generator

Provides realistic sample payments for development and demos.
Spreads payments over the last 60 days across every method, status
and order type.
"""

import random
from datetime import datetime, timedelta, UTC
from decimal import Decimal
from typing import List, Optional

from paydash.payments.models import PaymentMethod, PaymentRecord, PaymentStatus
from paydash.payments.store import PaymentStore, generate_transaction_id


CUSTOMER_NAMES = ["John Doe", "Jane Smith", "Bob Johnson", "Alice Williams", "Charlie Brown"]
COUNTRIES = ["USA", "UK", "Canada", "Australia", "Germany"]

# (value, label) pairs shown in the order type dropdown
ORDER_TYPES = [
    ("regular", "Regular"),
    ("subscription", "Subscription"),
    ("onetime", "Onetime"),
    ("cvc_no_show_penality", "CVC No Show Penality"),
    ("loyalty", "Loyalty"),
    ("cwav_telemedicine", "CWAV Telemedicine"),
]

SAMPLE_WINDOW_HOURS = 1440  # 60 days


def generate_sample_payments(
    count: int = 200,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> List[PaymentRecord]:
    """
    Generate sample payments.

    Args:
        count: Number of payments
        now: Reference time (default: current UTC time)
        seed: Random seed for reproducible amounts and timestamps

    Returns:
        List of PaymentRecord without store ids
    """
    rng = random.Random(seed)
    now = now or datetime.now(UTC)
    statuses = list(PaymentStatus)
    methods = list(PaymentMethod)

    payments = []
    for i in range(count):
        name = CUSTOMER_NAMES[i % len(CUSTOMER_NAMES)]
        # Every third payment completes; the rest cycle through the lifecycle
        status = PaymentStatus.COMPLETED if i % 3 == 0 else statuses[i % len(statuses)]

        payments.append(PaymentRecord(
            transaction_id=generate_transaction_id() if seed is None else f"TXN{rng.getrandbits(64):016X}",
            customer_id=f"CUST{i + 1:05d}",
            customer_name=name,
            customer_email=name.lower().replace(" ", ".") + "@example.com",
            amount=Decimal(str(round(rng.random() * 500 + 10, 2))),
            currency="USD",
            status=status,
            payment_method=methods[i % len(methods)],
            order_type=ORDER_TYPES[i % len(ORDER_TYPES)][0],
            created_at=now - timedelta(hours=rng.randrange(SAMPLE_WINDOW_HOURS)),
            description=f"Order payment #{i + 1}",
            order_id=f"ORD{i + 1:06d}",
            ip_address=f"192.168.{i % 255}.{(i * 7) % 255}",
            country=COUNTRIES[i % len(COUNTRIES)],
            error_message="Insufficient funds" if status == PaymentStatus.FAILED else None,
        ))

    return payments


def seed_store(
    store: PaymentStore,
    count: int = 200,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> int:
    """
    Fill an empty store with sample payments.

    Returns:
        Number of payments added (0 if the store already had data)
    """
    if store.count() > 0:
        return 0

    payments = generate_sample_payments(count=count, now=now, seed=seed)
    for payment in payments:
        store.save(payment)
    return len(payments)
