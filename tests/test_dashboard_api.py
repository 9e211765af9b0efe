"""Tests for the dashboard API."""

import pytest
from datetime import datetime, timedelta, UTC
from decimal import Decimal
from fastapi.testclient import TestClient

from paydash.payments import PaymentMethod, PaymentRecord, PaymentStatus, PaymentStore
from paydash.payments.service import PaymentService
from paydash.server import create_app


def make_payment(hours_ago: float, amount: str, **overrides) -> PaymentRecord:
    data = dict(
        payment_method=PaymentMethod.CREDIT_CARD,
        status=PaymentStatus.COMPLETED,
        order_type="regular",
        amount=Decimal(amount),
        created_at=datetime.now(UTC) - timedelta(hours=hours_ago),
        customer_name="John Doe",
    )
    data.update(overrides)
    return PaymentRecord(**data)


class TestDashboardEndpoints:
    """Test payment and metrics endpoints."""

    def setup_method(self):
        self.store = PaymentStore()
        self.store.save(make_payment(0.5, "10.00"))
        self.store.save(make_payment(1, "20.005", payment_method=PaymentMethod.PAYPAL))
        self.store.save(make_payment(1.5, "5.00", status=PaymentStatus.FAILED))
        self.store.save(make_payment(24 * 40, "100.00", order_type="loyalty"))
        self.client = TestClient(create_app(PaymentService(self.store), seed_sample_data=False))

    def test_health_check(self):
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json() == {"service": "PayDash API", "status": "running"}

    def test_aged_metrics_default(self):
        """Default report: 7 daily buckets, tail counted in total only."""
        response = self.client.get("/api/payments/aged-metrics")
        assert response.status_code == 200

        data = response.json()
        assert len(data["items"]) == 7
        assert data["items"][0]["label"] == "Today"
        assert data["items"][0]["count"] == 3
        assert data["items"][0]["amount"] == "$35.01"
        assert data["total"] == {"count": 4, "amount": "$135.01"}

    def test_aged_metrics_filters(self):
        """Query parameters are camelCase and normalised."""
        response = self.client.get(
            "/api/payments/aged-metrics",
            params={"paymentMethod": "CREDITCARD", "paymentState": "completed", "dateFilter": "last_30_days"},
        )

        data = response.json()
        assert data["total"]["count"] == 1
        assert len(data["items"]) == 30
        txn = data["items"][0]["transactions"][0]
        assert txn["paymentMethod"] == "Credit Card"
        assert txn["paymentState"] == "Completed"
        assert txn["customerName"] == "John Doe"
        assert txn["lastUpdated"] == txn["date"]

    def test_aged_metrics_hourly(self):
        response = self.client.get(
            "/api/payments/aged-metrics",
            params={"frequency": "hourly", "dateFilter": "today"},
        )

        data = response.json()
        assert [item["label"] for item in data["items"]][:2] == ["0h ago", "1h ago"]
        assert data["items"][0]["count"] == 1
        assert data["items"][1]["count"] == 2

    def test_list_and_get(self):
        """Payments list newest first; unknown ids are 404."""
        payments = self.client.get("/api/payments").json()
        assert len(payments) == 4
        assert payments[0]["id"] == 1
        assert payments[0]["paymentMethod"] == "CREDIT_CARD"

        assert self.client.get("/api/payments/2").json()["amount"] == 20.005
        assert self.client.get("/api/payments/999").status_code == 404

    def test_create_and_update_status(self):
        """Created payments start PENDING; status can be changed."""
        response = self.client.post(
            "/api/payments",
            json={"paymentMethod": "GOOGLE_PAY", "amount": 15.5, "orderType": "subscription"},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "PENDING"
        assert created["transactionId"].startswith("TXN")

        response = self.client.put(
            f"/api/payments/{created['id']}/status",
            params={"status": "FAILED", "errorMessage": "Card declined"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "FAILED"
        assert response.json()["errorMessage"] == "Card declined"

        missing = self.client.put("/api/payments/999/status", params={"status": "FAILED"})
        assert missing.status_code == 404

    def test_status_and_recent(self):
        failed = self.client.get("/api/payments/status/FAILED").json()
        recent = self.client.get("/api/payments/recent/2").json()

        assert len(failed) == 1
        assert len(recent) == 3

    def test_statistics(self):
        data = self.client.get("/api/payments/statistics").json()

        assert data["totalPayments"] == 4
        assert data["completedPayments"] == 3
        assert data["failedPayments"] == 1
        assert data["successRate"] == 75.0

    def test_filter_catalogues(self):
        statuses = self.client.get("/api/payments/filters/payment-statuses").json()
        methods = self.client.get("/api/payments/filters/payment-methods").json()
        order_types = self.client.get("/api/payments/filters/order-types").json()

        assert {"value": "pending", "label": "Pending"} in statuses
        assert all(s["value"] not in ("refunded", "completed") for s in statuses)
        assert {"value": "apple_pay", "label": "Apple Pay"} in methods
        assert {"value": "cwav_telemedicine", "label": "CWAV Telemedicine"} in order_types

    def test_sample_data_skipped_when_populated(self):
        response = self.client.post("/api/payments/generate-sample-data")

        assert response.status_code == 200
        assert len(self.client.get("/api/payments").json()) == 4


class TestAlertSettingsEndpoints:
    """Test alert settings endpoints."""

    def setup_method(self):
        self.client = TestClient(create_app(seed_sample_data=False))

    def test_defaults(self):
        data = self.client.get("/api/payments/alert-settings").json()

        assert data["warningThreshold"] == 75
        assert data["criticalThreshold"] == 100

    def test_save_and_reject(self):
        saved = self.client.post(
            "/api/payments/alert-settings",
            json={"warningThreshold": 40, "criticalThreshold": 70, "queryText": "failed payments"},
        )
        assert saved.status_code == 200
        assert saved.json()["queryText"] == "failed payments"

        rejected = self.client.post(
            "/api/payments/alert-settings",
            json={"warningThreshold": 70, "criticalThreshold": 40},
        )
        assert rejected.status_code == 400
        assert "less than critical" in rejected.json()["detail"]


class TestDataIntegrity:
    """Malformed store data surfaces as a data-integrity error."""

    def test_missing_amount_is_422(self):
        store = PaymentStore()
        store.save(PaymentRecord.model_construct(
            id=1,
            payment_method=PaymentMethod.PAYPAL,
            status=PaymentStatus.PENDING,
            created_at=datetime.now(UTC),
            amount=None,
        ))
        client = TestClient(create_app(PaymentService(store), seed_sample_data=False))

        response = client.get("/api/payments/aged-metrics")

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "amount"

    def test_missing_method_is_422(self):
        store = PaymentStore()
        store.save(PaymentRecord.model_construct(
            id=1,
            status=PaymentStatus.PENDING,
            created_at=datetime.now(UTC),
            amount=Decimal("12.00"),
        ))
        client = TestClient(create_app(PaymentService(store), seed_sample_data=False))

        response = client.get("/api/payments/aged-metrics")

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "paymentMethod"


class TestStartupSeeding:
    """Sample data is seeded on startup when enabled."""

    def test_lifespan_seeds_store(self):
        service = PaymentService()
        with TestClient(create_app(service, seed_sample_data=True)) as client:
            stats = client.get("/api/payments/statistics").json()

        assert stats["totalPayments"] == service.store.count()
        assert stats["totalPayments"] > 0
