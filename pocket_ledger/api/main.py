"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from pocket_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from pocket_ledger.api.v1 import bills, credit_cards, notifications, reports, transactions, users
from pocket_ledger.infrastructure.observability.logging import setup_logging
from pocket_ledger.config import settings
from pocket_ledger.infrastructure.database.models import Base
from pocket_ledger.infrastructure.database.session import engine

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup (no migrations yet)"""
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Pocket Ledger",
        description="Personal finance ledger: transactions, loan installments, bills and credit cards",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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

    # Register API routers
    app.include_router(users.router, prefix="/v1", tags=["users"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(bills.router, prefix="/v1", tags=["bills"])
    app.include_router(credit_cards.router, prefix="/v1", tags=["credit-cards"])
    app.include_router(notifications.router, prefix="/v1", tags=["notifications"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
