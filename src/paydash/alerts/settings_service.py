"""Alert settings service.

Settings are versioned: every save appends a new entry and the latest
one is current. Defaults are created on first access.
"""

import logging
import threading
from typing import List, Optional

from paydash.alerts.models import (
    AlertSettings,
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_WARNING_THRESHOLD,
)


logger = logging.getLogger(__name__)


class AlertSettingsError(ValueError):
    """Raised when alert thresholds are out of range or inconsistent."""


class AlertSettingsService:
    """In-memory store for alert thresholds."""

    def __init__(self):
        self._history: List[AlertSettings] = []
        self._lock = threading.Lock()

    def _append(self, settings: AlertSettings) -> AlertSettings:
        # caller holds self._lock
        settings = settings.model_copy(update={"id": len(self._history) + 1})
        self._history.append(settings)
        return settings

    def get_alert_settings(self) -> AlertSettings:
        """Current settings, creating the defaults if none were saved."""
        with self._lock:
            if not self._history:
                return self._append(AlertSettings(
                    warning_threshold=DEFAULT_WARNING_THRESHOLD,
                    critical_threshold=DEFAULT_CRITICAL_THRESHOLD,
                ))
            return self._history[-1]

    def save_alert_settings(
        self,
        warning_threshold: int,
        critical_threshold: int,
        query_text: Optional[str] = None,
    ) -> AlertSettings:
        """
        Save new thresholds.

        Raises:
            AlertSettingsError: If a threshold is outside 0-100 or
                warning is not below critical
        """
        if not 0 <= warning_threshold <= 100:
            raise AlertSettingsError("Warning threshold must be between 0 and 100")
        if not 0 <= critical_threshold <= 100:
            raise AlertSettingsError("Critical threshold must be between 0 and 100")
        if warning_threshold >= critical_threshold:
            raise AlertSettingsError("Warning threshold must be less than critical threshold")

        with self._lock:
            settings = self._append(AlertSettings(
                warning_threshold=warning_threshold,
                critical_threshold=critical_threshold,
                query_text=query_text,
            ))
        logger.info(f"Alert settings saved: warning={warning_threshold} critical={critical_threshold}")
        return settings
