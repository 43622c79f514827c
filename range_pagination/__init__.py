"""HTTP Range-based pagination for FastAPI routes."""

from range_pagination.middlewares.pagination import get_current_pagination, paginate
from range_pagination.schemas.pagination import PaginationContext, PaginationOptions, RangeSpec
from range_pagination.utils.pagination import slice_by_range

__all__ = [
    "PaginationContext",
    "PaginationOptions",
    "RangeSpec",
    "get_current_pagination",
    "paginate",
    "slice_by_range",
]
