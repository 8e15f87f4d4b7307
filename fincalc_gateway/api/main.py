"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fincalc_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fincalc_gateway.api.v1 import calculators, compare
from fincalc_gateway.infrastructure.observability.logging import setup_logging
from fincalc_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinCalc Gateway",
        description="EMI, SIP and loan comparison calculators",
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

    # Register API routers
    app.include_router(calculators.router, prefix="/v1", tags=["calculators"])
    app.include_router(compare.router, prefix="/v1", tags=["comparison"])

    return app


app = create_app()
