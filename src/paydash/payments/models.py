"""
Payment Data Models

Defines the payment records held by the store and consumed read-only by
the aged-metrics engine, plus the enumerations the dashboard filters on.
"""

from datetime import datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class PaymentMethod(str, Enum):
    """Supported payment methods."""

    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PAYPAL = "PAYPAL"
    APPLE_PAY = "APPLE_PAY"
    GOOGLE_PAY = "GOOGLE_PAY"


class PaymentStatus(str, Enum):
    """Payment lifecycle states."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    CANCELLED = "CANCELLED"


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PaymentRecord(CamelModel):
    """
    Payment Record - a single payment as held by the store.

    `created_at` and `amount` are required: the aged-metrics engine
    cannot place or total a record without them.
    """

    # Identity
    id: Optional[int] = Field(default=None, description="Store-assigned numeric id")
    transaction_id: Optional[str] = Field(default=None, description="Gateway transaction reference")
    order_id: Optional[str] = Field(default=None, description="Merchant order id")

    # Classification
    order_type: Optional[str] = Field(default=None, description="Free-form order type")
    payment_method: PaymentMethod = Field(description="Payment method")
    status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        description="Payment state",
    )

    # Monetary
    amount: Decimal = Field(ge=0, description="Payment amount")
    currency: str = Field(default="USD", description="ISO currency code")

    # Temporal
    created_at: datetime = Field(description="When the payment was created")
    updated_at: Optional[datetime] = Field(default=None, description="Last status change")

    # Descriptive (pass-through)
    customer_id: Optional[str] = Field(default=None)
    customer_name: Optional[str] = Field(default=None)
    customer_email: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)
    ip_address: Optional[str] = Field(default=None)
    error_message: Optional[str] = Field(default=None)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are taken to be UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)

    @property
    def last_updated(self) -> datetime:
        """Last update time, falling back to creation time."""
        return self.updated_at or self.created_at


class PaymentStatistics(CamelModel):
    """Headline statistics across all payments."""

    total_payments: int = Field(default=0, ge=0)
    completed_payments: int = Field(default=0, ge=0)
    pending_payments: int = Field(default=0, ge=0)
    failed_payments: int = Field(default=0, ge=0)
    refunded_payments: int = Field(default=0, ge=0)
    total_amount: float = Field(default=0.0)
    completed_amount: float = Field(default=0.0)
    success_rate: float = Field(default=0.0, description="Completed share (percent)")
    average_transaction_amount: float = Field(default=0.0)


class FilterOption(BaseModel):
    """Value/label pair for dashboard dropdowns."""

    value: str
    label: str


class PaymentCreate(CamelModel):
    """Payload for creating a payment; the store fills in identity and timing."""

    order_id: Optional[str] = None
    order_type: Optional[str] = None
    payment_method: PaymentMethod
    amount: Decimal = Field(ge=0)
    currency: str = "USD"
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    description: Optional[str] = None
    country: Optional[str] = None
    ip_address: Optional[str] = None
