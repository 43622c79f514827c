from typing import Any, List, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from range_pagination.config import Environment, settings
from range_pagination.logging import get_logger

logger = get_logger(__name__)

_trace_provider: Optional[TracerProvider] = None
_span_processors: List[BatchSpanProcessor] = []


def create_resource() -> Resource:
    """Create OpenTelemetry resource with service information."""
    return Resource.create(
        {
            "service.name": settings.OTEL_SERVICE_NAME,
            "service.version": settings.OTEL_SERVICE_VERSION,
            "service.environment": settings.ENVIRONMENT.value,
        }
    )


def setup_tracing() -> None:
    """Configure OpenTelemetry tracing, exporting over OTLP when an endpoint is set."""
    global _trace_provider

    provider = TracerProvider(resource=create_resource(), sampler=TraceIdRatioBased(rate=settings.TRACE_SAMPLING_RATE))

    if settings.OTLP_ENDPOINT:
        processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True))
        provider.add_span_processor(processor)
        _span_processors.append(processor)
        logger.info("OTLP trace exporter configured", endpoint=settings.OTLP_ENDPOINT)
    elif settings.ENVIRONMENT == Environment.DEVELOPMENT:
        processor = BatchSpanProcessor(ConsoleSpanExporter())
        provider.add_span_processor(processor)
        _span_processors.append(processor)
        logger.info("Console trace exporter configured for development")

    trace.set_tracer_provider(provider)
    _trace_provider = provider
    logger.info(
        "OpenTelemetry tracing configured",
        sampling_rate=settings.TRACE_SAMPLING_RATE,
        exporters_count=len(_span_processors),
    )


def init_observability() -> None:
    """Initialize tracing if it is enabled."""
    if not settings.TRACING_ENABLED:
        logger.debug("Tracing disabled")
        return
    setup_tracing()


def instrument_app(app: Any) -> None:
    """Instrument FastAPI application with OpenTelemetry."""
    if not settings.TRACING_ENABLED:
        return
    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=trace.get_tracer_provider(),
        excluded_urls="/health,/metrics",
    )
    logger.info("FastAPI instrumentation enabled")


def shutdown_observability() -> None:
    """Flush and shut down the tracer provider."""
    global _trace_provider

    if _trace_provider is None:
        return

    for processor in _span_processors:
        processor.force_flush(timeout_millis=1000)
    _trace_provider.shutdown()
    _span_processors.clear()
    _trace_provider = None
    logger.info("Observability shut down")
