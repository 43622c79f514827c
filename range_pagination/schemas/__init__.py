from .pagination import WILDCARD_TOTAL, PaginationContext, PaginationOptions, RangeSpec

__all__ = [
    "PaginationContext",
    "PaginationOptions",
    "RangeSpec",
    "WILDCARD_TOTAL",
]
