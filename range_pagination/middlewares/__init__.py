from .logging import LoggingMiddleware
from .metrics import MetricsMiddleware
from .pagination import get_current_pagination, paginate

__all__ = [
    "LoggingMiddleware",
    "MetricsMiddleware",
    "get_current_pagination",
    "paginate",
]
