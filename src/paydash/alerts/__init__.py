"""Alert threshold settings."""

from paydash.alerts.models import AlertSettings, AlertSettingsRequest
from paydash.alerts.settings_service import AlertSettingsService, AlertSettingsError

__all__ = ["AlertSettings", "AlertSettingsRequest", "AlertSettingsService", "AlertSettingsError"]
