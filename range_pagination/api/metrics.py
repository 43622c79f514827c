"""HTTP API metrics for Prometheus monitoring."""

from prometheus_client import Counter, Gauge, Histogram

# HTTP request metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method"],
)

http_exceptions_total = Counter(
    "http_exceptions_total",
    "Total number of exceptions during HTTP request processing",
    ["method", "endpoint", "exception_type"],
)

# Pagination metrics, one increment per paginated route call
range_pagination_requests_total = Counter(
    "range_pagination_requests_total",
    "Paginated route calls by how the paginate wrapper handled them",
    ["outcome"],
)

http_partial_responses_total = Counter(
    "http_partial_responses_total",
    "Responses served as 206 Partial Content",
    ["endpoint"],
)
