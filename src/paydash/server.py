"""
PayDash API Server

Exposes payments, statistics, filter catalogues, alert settings and
aged-metrics reports to the dashboard frontend.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from paydash import __version__
from paydash.alerts import AlertSettings, AlertSettingsError, AlertSettingsRequest, AlertSettingsService
from paydash.config import config
from paydash.metrics import AgedMetricsReport
from paydash.payments import (
    DataIntegrityError,
    PaymentCreate,
    PaymentNotFoundError,
    PaymentRecord,
    PaymentStatistics,
    PaymentStatus,
)
from paydash.payments.models import FilterOption
from paydash.payments.service import PaymentService


logger = logging.getLogger(__name__)


def create_app(
    payment_service: Optional[PaymentService] = None,
    alert_service: Optional[AlertSettingsService] = None,
    seed_sample_data: Optional[bool] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        payment_service: Service to serve (default: fresh in-memory store)
        alert_service: Alert settings service (default: fresh instance)
        seed_sample_data: Seed an empty store on startup (default: from config)
    """
    payments = payment_service or PaymentService()
    alerts = alert_service or AlertSettingsService()
    seed = config.seed_sample_data if seed_sample_data is None else seed_sample_data

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if seed:
            payments.generate_sample_data(count=config.sample_size)
        yield

    app = FastAPI(
        title="PayDash API",
        description="Payment tracking dashboard backend",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DataIntegrityError)
    async def data_integrity_handler(request: Request, exc: DataIntegrityError):
        return JSONResponse(status_code=422, content={"detail": exc.message, "errors": exc.errors})

    @app.exception_handler(PaymentNotFoundError)
    async def not_found_handler(request: Request, exc: PaymentNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(AlertSettingsError)
    async def alert_settings_handler(request: Request, exc: AlertSettingsError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/")
    async def root():
        return {"service": "PayDash API", "status": "running"}

    router = APIRouter(prefix="/api/payments")

    @router.get("", response_model=List[PaymentRecord])
    def list_payments():
        return payments.store.list_all_payments()

    @router.post("", response_model=PaymentRecord, status_code=201)
    def create_payment(payload: PaymentCreate):
        return payments.store.create(payload)

    # Static paths are registered before /{payment_id}
    @router.get("/statistics", response_model=PaymentStatistics)
    def get_statistics():
        return payments.get_statistics()

    @router.get("/aged-metrics", response_model=AgedMetricsReport)
    def get_aged_metrics(
        order_type: Optional[str] = Query(default=None, alias="orderType"),
        payment_method: Optional[str] = Query(default=None, alias="paymentMethod"),
        payment_state: Optional[str] = Query(default=None, alias="paymentState"),
        date_filter: Optional[str] = Query(default=None, alias="dateFilter"),
        frequency: str = Query(default="daily"),
    ):
        """
        Aged-metrics report bucketed by payment age.

        Unknown filter or frequency tokens fall back to permissive defaults.
        """
        return payments.get_aged_metrics(
            order_type=order_type,
            payment_method=payment_method,
            payment_state=payment_state,
            date_filter=date_filter,
            frequency=frequency,
        )

    @router.post("/generate-sample-data")
    def generate_sample_data():
        payments.generate_sample_data(count=config.sample_size)
        return "Sample data generated successfully"

    @router.get("/filters/payment-statuses", response_model=List[FilterOption])
    def payment_statuses():
        return payments.payment_status_options()

    @router.get("/filters/payment-methods", response_model=List[FilterOption])
    def payment_methods():
        return payments.payment_method_options()

    @router.get("/filters/order-types", response_model=List[FilterOption])
    def order_types():
        return payments.order_type_options()

    @router.get("/alert-settings", response_model=AlertSettings)
    def get_alert_settings():
        return alerts.get_alert_settings()

    @router.post("/alert-settings", response_model=AlertSettings)
    def save_alert_settings(request: AlertSettingsRequest):
        return alerts.save_alert_settings(
            request.warning_threshold,
            request.critical_threshold,
            request.query_text,
        )

    @router.get("/status/{status}", response_model=List[PaymentRecord])
    def payments_by_status(status: PaymentStatus):
        return payments.store.list_by_status(status)

    @router.get("/recent/{hours}", response_model=List[PaymentRecord])
    def recent_payments(hours: int):
        return payments.store.list_recent(hours)

    @router.get("/{payment_id}", response_model=PaymentRecord)
    def get_payment(payment_id: int):
        payment = payments.store.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    @router.put("/{payment_id}/status", response_model=PaymentRecord)
    def update_payment_status(
        payment_id: int,
        status: PaymentStatus,
        error_message: Optional[str] = Query(default=None, alias="errorMessage"),
    ):
        return payments.store.update_status(payment_id, status, error_message)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host=config.host, port=config.port)
