"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from pixelfin.api.middleware import MetricsMiddleware
from pixelfin.api.v1 import entries, ledger
from pixelfin.config import settings
from pixelfin.infrastructure.observability.logging import setup_logging
from pixelfin.infrastructure.storage.base import build_storage
from pixelfin.services.ledger_store import LedgerStore

# Setup structured logging
setup_logging(settings.log_level)


def create_app(store: LedgerStore | None = None) -> FastAPI:
    """Create and configure FastAPI application; the store is loaded on startup"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store or LedgerStore(build_storage(settings))
        await app.state.store.load()
        yield

    app = FastAPI(
        title="PixelFin Ledger",
        description="Savings/expense ledger with a rolling 7-day trend",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(MetricsMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(ledger.router, prefix="/v1", tags=["ledger"])
    app.include_router(entries.router, prefix="/v1", tags=["entries"])

    return app


app = create_app()
