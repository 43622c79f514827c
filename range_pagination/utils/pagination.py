"""Helpers for serving in-memory collections through the paginate wrapper."""

from typing import Optional, Sequence, TypeVar

from opentelemetry import trace

from range_pagination.exceptions.base import RangeNotSatisfiableError
from range_pagination.middlewares.pagination import get_current_pagination
from range_pagination.schemas.pagination import PaginationContext

tracer = trace.get_tracer(__name__)

T = TypeVar("T")


def slice_by_range(items: Sequence[T], pagination: Optional[PaginationContext] = None) -> list[T]:
    """Return the part of ``items`` the active range asks for.

    The range is read as an inclusive ``start-end`` window of item indexes.
    As a side effect the context's ``total`` is set to ``len(items)`` and
    ``return_range`` to the window actually returned, which is clamped to the
    end of the sequence.

    Args:
        items: The full collection
        pagination: Context to apply; defaults to the one of the running handler

    Returns:
        list: The selected items, or all of them when no range is active

    Raises:
        InvalidRangeError: If the range bounds are not integers or start > end
        RangeNotSatisfiableError: If the range starts past the last item

    """
    pagination = pagination if pagination is not None else get_current_pagination()
    if pagination is None:
        return list(items)

    with tracer.start_as_current_span("slice_by_range") as span:
        start, end = pagination.range.bounds()
        total = len(items)

        span.set_attribute("range.start", start)
        span.set_attribute("range.end", end)
        span.set_attribute("total", total)

        pagination.total = total
        if total == 0:
            return []

        if start >= total:
            raise RangeNotSatisfiableError(
                "Range starts beyond the end of the collection",
                range_value=str(pagination.range),
                total=total,
            )

        window = list(items[start : end + 1])
        pagination.return_range = (start, start + len(window) - 1)

        span.set_attribute("items_returned", len(window))
        return window
