"""Models for aged-metrics reports."""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from pydantic import Field, field_serializer

from paydash.payments.models import CamelModel, PaymentRecord


CENTS = Decimal("0.01")


def format_currency(amount: Decimal) -> str:
    """Format an amount for display: $ and two decimals, half-up."""
    return f"${amount.quantize(CENTS, rounding=ROUND_HALF_UP)}"


def format_enum_value(value: Optional[str]) -> str:
    """Humanise an enum token: CREDIT_CARD -> Credit Card."""
    if not value:
        return ""
    return " ".join(
        word[:1].upper() + word[1:].lower()
        for word in value.split("_")
    )


class TransactionView(CamelModel):
    """Fixed-shape projection of a payment shown inside a bucket."""

    id: Optional[int] = None
    order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    order_type: Optional[str] = None
    amount: Decimal
    currency: str
    payment_method: str = Field(description="Human-formatted method, e.g. Credit Card")
    payment_state: str = Field(description="Human-formatted state, e.g. Failed")
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_id: Optional[str] = None
    date: datetime = Field(description="Creation time")
    last_updated: datetime = Field(description="Last update, or creation time")
    description: Optional[str] = None
    country: Optional[str] = None
    ip_address: Optional[str] = None
    error_message: Optional[str] = None

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)

    @classmethod
    def from_payment(cls, payment: PaymentRecord) -> "TransactionView":
        return cls(
            id=payment.id,
            order_id=payment.order_id,
            transaction_id=payment.transaction_id,
            order_type=payment.order_type,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=format_enum_value(payment.payment_method.value),
            payment_state=format_enum_value(payment.status.value),
            customer_name=payment.customer_name,
            customer_email=payment.customer_email,
            customer_id=payment.customer_id,
            date=payment.created_at,
            last_updated=payment.last_updated,
            description=payment.description,
            country=payment.country,
            ip_address=payment.ip_address,
            error_message=payment.error_message,
        )


class AgedBucket(CamelModel):
    """Aggregates for one age group."""

    label: str
    count: int = Field(ge=0)
    amount: Decimal = Field(ge=0, description="Exact sum; rendered as $x.xx")
    highlight: bool = False
    transactions: List[TransactionView] = Field(default_factory=list)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> str:
        return format_currency(amount)


class ReportTotal(CamelModel):
    """Grand total over every filtered payment."""

    count: int = Field(ge=0)
    amount: Decimal = Field(ge=0)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> str:
        return format_currency(amount)


class AgedMetricsReport(CamelModel):
    """
    Aged-metrics report.

    `total` covers the whole filtered set, so payments older than the
    last bucket are totalled but not itemised.
    """

    items: List[AgedBucket] = Field(default_factory=list)
    total: ReportTotal
