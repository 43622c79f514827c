from .base import InvalidRangeError, RangeNotSatisfiableError, RangePaginationError
from .handlers import (
    create_error_response,
    generic_exception_handler,
    http_exception_handler,
    range_pagination_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "InvalidRangeError",
    "RangeNotSatisfiableError",
    "RangePaginationError",
    "create_error_response",
    "generic_exception_handler",
    "http_exception_handler",
    "range_pagination_exception_handler",
    "validation_exception_handler",
]
