from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from range_pagination.api.v1 import api_router
from range_pagination.config import settings
from range_pagination.exceptions import (
    RangePaginationError,
    generic_exception_handler,
    http_exception_handler,
    range_pagination_exception_handler,
    validation_exception_handler,
)
from range_pagination.logging import configure_logging, get_logger
from range_pagination.middlewares import LoggingMiddleware, MetricsMiddleware
from range_pagination.observability import init_observability, instrument_app, shutdown_observability

# Configure logging before anything else
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Range Pagination Service", version=settings.APP_VERSION)

    init_observability()
    instrument_app(fastapi_app)

    logger.info("Application startup completed")
    try:
        yield
    finally:
        logger.info("Shutting down Range Pagination Service")
        shutdown_observability()


def create_app() -> FastAPI:
    """Create FastAPI application with all configurations."""
    fastapi_app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="HTTP Range-based pagination for AJAX clients",
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # Metrics first, logging last for complete request/response logging
    if settings.ENABLE_METRICS:
        fastapi_app.add_middleware(MetricsMiddleware)
    fastapi_app.add_middleware(LoggingMiddleware)

    fastapi_app.add_exception_handler(RangePaginationError, range_pagination_exception_handler)  # type: ignore
    fastapi_app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    fastapi_app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore
    fastapi_app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore
    fastapi_app.add_exception_handler(Exception, generic_exception_handler)  # type: ignore

    @fastapi_app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.OTEL_SERVICE_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    if settings.ENABLE_METRICS:

        @fastapi_app.get("/metrics", tags=["Monitoring"])
        async def metrics_endpoint():
            """Prometheus metrics endpoint."""
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    fastapi_app.include_router(api_router, prefix="/api")

    logger.info("FastAPI application created")
    return fastapi_app


app = create_app()
