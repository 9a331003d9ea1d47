"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from payments_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from payments_gateway.api.v1 import payments, stats
from payments_gateway.infrastructure.observability.logging import setup_logging
from payments_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Payments Gateway",
        description="Payment CRUD with continuation-token pagination and debit statistics",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; stats before payments so /payments/stats is not read as an ID
    app.include_router(stats.router, prefix="/v1", tags=["stats"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
