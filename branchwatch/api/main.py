"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from branchwatch.api.middleware import RequestIDMiddleware, MetricsMiddleware
from branchwatch.api.v1 import branches, dashboard, demo, records
from branchwatch.infrastructure.database.session import init_db
from branchwatch.infrastructure.observability.logging import setup_logging
from branchwatch.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="BranchWatch",
        description="Branch performance tracking and risk scoring service",
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
    app.include_router(branches.router, prefix="/v1", tags=["branches"])
    app.include_router(records.router, prefix="/v1", tags=["records"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(demo.router, prefix="/v1", tags=["demo"])

    return app


app = create_app()
