"""
Dashboard Client

HTTP client for consumers of the PayDash API (reporting jobs, other
services). Returns parsed report models rather than raw JSON.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from paydash.config import config
from paydash.payments.models import PaymentStatistics


logger = logging.getLogger(__name__)


class DashboardServiceError(Exception):
    """Raised when the PayDash API cannot be reached or returns an error."""


def _aged_metrics_params(
    order_type: Optional[str],
    payment_method: Optional[str],
    payment_state: Optional[str],
    date_filter: Optional[str],
    frequency: str,
) -> Dict[str, str]:
    """Query parameters for aged metrics; "all" filters are left out."""
    params = {"frequency": frequency}
    for key, value in (
        ("orderType", order_type),
        ("paymentMethod", payment_method),
        ("paymentState", payment_state),
        ("dateFilter", date_filter),
    ):
        if value and value != "all":
            params[key] = value
    return params


class DashboardClient:
    """
    Client for the PayDash API

    Aged-metrics reports come back in their wire form: amounts are
    display strings such as "$35.01".
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize dashboard client.

        Args:
            base_url: Base URL of the API (default: from config)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (testing)
            async_transport: Optional async httpx transport (testing)
        """
        self.base_url = base_url or f"http://{config.host}:{config.port}"
        self.timeout = timeout
        self._transport = transport
        self._async_transport = async_transport
        self.logger = logger

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            with httpx.Client(base_url=self.base_url, transport=self._transport) as client:
                response = client.get(path, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPError as e:
            self.logger.error(f"Request to {path} failed: {e}")
            raise DashboardServiceError(f"Dashboard service error: {e}") from e

    async def _get_async(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._async_transport,
            ) as client:
                response = await client.get(path, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPError as e:
            self.logger.error(f"Request to {path} failed: {e}")
            raise DashboardServiceError(f"Dashboard service error: {e}") from e

    def get_aged_metrics(
        self,
        order_type: Optional[str] = None,
        payment_method: Optional[str] = None,
        payment_state: Optional[str] = None,
        date_filter: Optional[str] = None,
        frequency: str = "daily",
    ) -> Dict[str, Any]:
        """
        Fetch an aged-metrics report.

        Returns:
            Report dict with "items" and "total"

        Raises:
            DashboardServiceError: If the service is unavailable
        """
        params = _aged_metrics_params(order_type, payment_method, payment_state, date_filter, frequency)
        report = self._get("/api/payments/aged-metrics", params)
        self.logger.info(f"Fetched aged metrics ({frequency}): {len(report['items'])} buckets")
        return report

    async def get_aged_metrics_async(
        self,
        order_type: Optional[str] = None,
        payment_method: Optional[str] = None,
        payment_state: Optional[str] = None,
        date_filter: Optional[str] = None,
        frequency: str = "daily",
    ) -> Dict[str, Any]:
        """Async version of get_aged_metrics."""
        params = _aged_metrics_params(order_type, payment_method, payment_state, date_filter, frequency)
        report = await self._get_async("/api/payments/aged-metrics", params)
        self.logger.info(f"Fetched aged metrics ({frequency}): {len(report['items'])} buckets")
        return report

    def get_statistics(self) -> PaymentStatistics:
        return PaymentStatistics.model_validate(self._get("/api/payments/statistics"))
