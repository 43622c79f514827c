import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Optional

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from range_pagination.config import settings

# Context variable to store correlation ID across async requests
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str:
    """Get or create a correlation ID for the current request context."""
    correlation_id = correlation_id_var.get()
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
        correlation_id_var.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current request context."""
    correlation_id_var.set(correlation_id)


def add_correlation_id(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add correlation ID to log entries."""
    event_dict["correlation_id"] = get_correlation_id()
    return event_dict


def add_service_info(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add service information to log entries."""
    event_dict["service"] = settings.OTEL_SERVICE_NAME
    event_dict["version"] = settings.OTEL_SERVICE_VERSION
    event_dict["environment"] = settings.ENVIRONMENT.value
    return event_dict


def get_trace_id() -> Optional[str]:
    """Get the current trace ID from OpenTelemetry context."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.trace_id == trace.INVALID_TRACE_ID:
        return None
    # 32 hex characters, zero-padded
    return f"{span_context.trace_id:032x}"


def get_span_id() -> Optional[str]:
    """Get the current span ID from OpenTelemetry context."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.span_id == trace.INVALID_SPAN_ID:
        return None
    return f"{span_context.span_id:016x}"


def add_trace_context(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add trace and span IDs to log entries."""
    trace_id = get_trace_id()
    span_id = get_span_id()

    if trace_id:
        event_dict["trace_id"] = trace_id
    if span_id:
        event_dict["span_id"] = span_id

    return event_dict


def configure_logging() -> None:
    """Configure structured logging with structlog."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.value),
    )

    common_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        add_trace_context,
        add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "development")

    structlog.configure(
        processors=common_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # Silence noisy third-party loggers in production
    if settings.ENVIRONMENT == "production":
        logging.getLogger("uvicorn").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class CentralizedLogger:
    """Structured logger that mirrors its events onto the current OpenTelemetry span."""

    def __init__(self, name: str = __name__):
        self.name = name
        self.logger = structlog.get_logger(name)

    def _log_with_trace(self, level: str, event: str, **kwargs):
        span = trace.get_current_span()

        if span.is_recording():
            attributes = {
                "level": level.upper(),
                "logger": self.name,
                "timestamp": int(time.time() * 1000),
                "event_name": event,
            }
            for key, value in kwargs.items():
                if key != "exc_info":
                    attributes[key] = self._convert_to_safe_attribute(value)
            span.add_event(f"[{level.upper()}] {event}", attributes=attributes)
            if level == "error":
                span.set_status(Status(StatusCode.ERROR, event))

        getattr(self.logger, level)(event, **kwargs)

    @staticmethod
    def _convert_to_safe_attribute(value):
        """Convert value to a span attribute OpenTelemetry accepts."""
        if value is None:
            return "null"
        if isinstance(value, (bool, int, float)):
            return value
        return str(value)[:500]

    def debug(self, event: str, **kwargs):
        self._log_with_trace("debug", event, **kwargs)

    def info(self, event: str, **kwargs):
        self._log_with_trace("info", event, **kwargs)

    def warning(self, event: str, **kwargs):
        self._log_with_trace("warning", event, **kwargs)

    def error(self, event: str, **kwargs):
        self._log_with_trace("error", event, **kwargs)

    def exception(self, event: str, **kwargs):
        """Log exception with traceback and record it on the current span."""
        kwargs["exc_info"] = True
        self._log_with_trace("error", event, **kwargs)

        span = trace.get_current_span()
        if span.is_recording():
            _, exc_value, _ = sys.exc_info()
            if exc_value:
                span.record_exception(exc_value)


def get_logger(name: str) -> CentralizedLogger:
    """Get a configured centralized logger instance."""
    return CentralizedLogger(name)
