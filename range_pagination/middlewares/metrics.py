"""Metrics middleware for tracking HTTP request/response metrics."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from range_pagination.api.metrics import (
    http_exceptions_total,
    http_partial_responses_total,
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

# Endpoints to exclude from metrics collection
EXCLUDED_ENDPOINTS = {"/health", "/metrics", "/docs", "/redoc", "/openapi.json"}

UNMATCHED_ENDPOINT = "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware for collecting HTTP request/response metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics."""
        if request.url.path in EXCLUDED_ENDPOINTS:
            return await call_next(request)

        method = request.method

        http_requests_in_progress.labels(method=method).inc()
        start_time = time.time()

        try:
            response = await call_next(request)

            duration = time.time() - start_time
            endpoint = self._route_template(request)
            http_requests_total.labels(method=method, endpoint=endpoint, status_code=response.status_code).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

            if response.status_code == 206:
                http_partial_responses_total.labels(endpoint=endpoint).inc()

            return response

        except Exception as exc:
            duration = time.time() - start_time
            endpoint = self._route_template(request)
            exception_type = type(exc).__name__

            http_exceptions_total.labels(method=method, endpoint=endpoint, exception_type=exception_type).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

            raise

        finally:
            http_requests_in_progress.labels(method=method).dec()

    @staticmethod
    def _route_template(request: Request) -> str:
        """Label requests by the matched route's path template, never by the raw URL.

        Examples:
            /api/v1/items/42 -> /api/v1/items/{item_id}
            /no/such/path -> unmatched

        """
        route = request.scope.get("route")
        if route is None:
            for candidate in request.app.router.routes:
                match, _ = candidate.matches(request.scope)
                if match == Match.FULL:
                    route = candidate
                    break
        return getattr(route, "path_format", None) or UNMATCHED_ENDPOINT
