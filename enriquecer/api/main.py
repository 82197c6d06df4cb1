"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from enriquecer.api import shell
from enriquecer.api.middleware import RequestIDMiddleware, MetricsMiddleware
from enriquecer.api.v1 import backup, categories, summary, transactions
from enriquecer.infrastructure.database.session import init_db
from enriquecer.infrastructure.observability.logging import setup_logging
from enriquecer.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Enriquecer Personal Finance",
        description="Income and expense ledger with monthly and cumulative reports",
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
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(summary.router, prefix="/v1", tags=["reports"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])
    app.include_router(backup.router, prefix="/v1", tags=["backup"])
    app.include_router(shell.router, tags=["shell"])

    return app


app = create_app()
