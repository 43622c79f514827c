from .pagination import slice_by_range

__all__ = ["slice_by_range"]
