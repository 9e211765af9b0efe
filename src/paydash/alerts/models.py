"""Alert threshold models."""

from datetime import datetime, UTC
from typing import Optional

from pydantic import Field

from paydash.payments.models import CamelModel


DEFAULT_WARNING_THRESHOLD = 75
DEFAULT_CRITICAL_THRESHOLD = 100


class AlertSettings(CamelModel):
    """Warning/critical thresholds (percent) for dashboard alerts."""

    id: Optional[int] = Field(default=None)
    warning_threshold: int = Field(description="Warning level, 0-100")
    critical_threshold: int = Field(description="Critical level, 0-100")
    query_text: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AlertSettingsRequest(CamelModel):
    """Payload for saving alert settings."""

    warning_threshold: int
    critical_threshold: int
    query_text: Optional[str] = Field(default=None, max_length=1000)
