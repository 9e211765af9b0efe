"""Tests for the dashboard HTTP client."""

import asyncio

import httpx
import pytest

from paydash.client import DashboardClient, DashboardServiceError


REPORT = {
    "items": [{"label": "Today", "count": 1, "amount": "$10.00", "highlight": False, "transactions": []}],
    "total": {"count": 1, "amount": "$10.00"},
}


def report_handler(seen: list):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/api/payments/aged-metrics":
            return httpx.Response(200, json=REPORT)
        if request.url.path == "/api/payments/statistics":
            return httpx.Response(200, json={"totalPayments": 3, "completedPayments": 2, "successRate": 66.7})
        return httpx.Response(404, json={"detail": "Not Found"})
    return handler


class TestDashboardClient:
    """Test request building and error handling."""

    def setup_method(self):
        self.requests = []
        handler = report_handler(self.requests)
        self.client = DashboardClient(
            base_url="http://dashboard.test",
            transport=httpx.MockTransport(handler),
            async_transport=httpx.MockTransport(handler),
        )

    def test_get_aged_metrics_params(self):
        """Filters set to 'all' or None are not sent."""
        report = self.client.get_aged_metrics(
            payment_method="credit_card",
            payment_state="all",
            date_filter="last_30_days",
            frequency="weekly",
        )

        assert report == REPORT
        params = dict(self.requests[0].url.params)
        assert params == {
            "frequency": "weekly",
            "paymentMethod": "credit_card",
            "dateFilter": "last_30_days",
        }

    def test_get_aged_metrics_async(self):
        report = asyncio.run(self.client.get_aged_metrics_async(order_type="loyalty"))

        assert report["total"]["amount"] == "$10.00"
        assert dict(self.requests[0].url.params) == {"frequency": "daily", "orderType": "loyalty"}

    def test_get_statistics(self):
        stats = self.client.get_statistics()

        assert stats.total_payments == 3
        assert stats.completed_payments == 2

    def test_http_error_wrapped(self):
        """HTTP failures surface as DashboardServiceError."""
        def failing(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"detail": "unavailable"})

        client = DashboardClient(base_url="http://dashboard.test", transport=httpx.MockTransport(failing))

        with pytest.raises(DashboardServiceError):
            client.get_aged_metrics()
