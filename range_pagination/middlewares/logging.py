import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from range_pagination.logging import get_correlation_id, get_logger, get_trace_id, set_correlation_id

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging with correlation IDs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details."""
        start_time = time.time()

        correlation_id = request.headers.get("X-Correlation-ID")
        if correlation_id:
            set_correlation_id(correlation_id)
        else:
            correlation_id = get_correlation_id()

        request.state.correlation_id = correlation_id

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
            range=request.headers.get("Range"),
            range_unit=request.headers.get("Range-Unit"),
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                content_range=response.headers.get("Content-Range"),
                process_time=round(process_time * 1000, 2),  # milliseconds
            )

            response.headers["X-Correlation-ID"] = correlation_id

            trace_id = get_trace_id()
            if trace_id:
                response.headers["X-Trace-ID"] = trace_id

            return response

        except Exception as exc:
            process_time = time.time() - start_time

            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                process_time=round(process_time * 1000, 2),
                error=str(exc),
                exc_info=True,
            )

            raise
