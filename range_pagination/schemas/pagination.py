"""Pagination schemas shared between the paginate wrapper and route handlers."""

from __future__ import annotations

import re
from typing import Any, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from range_pagination.config import PaginationMode, Settings
from range_pagination.exceptions.base import InvalidRangeError

WILDCARD_TOTAL = "*"

_STRICT_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


class RangeSpec(NamedTuple):
    """A requested ``start-end`` window, kept as the raw tokens the client sent."""

    start: str
    end: str

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    @classmethod
    def parse(cls, value: str, strict: bool = False) -> "RangeSpec":
        """Split a Range value into its start and end tokens.

        Permissive parsing splits on every ``-`` and keeps the first two
        tokens, so ``-5--1`` becomes ``("", "5")`` and ``10`` becomes
        ``("10", "")``. Strict parsing requires two non-negative integers
        with ``start <= end`` and raises InvalidRangeError otherwise.
        """
        if strict:
            match = _STRICT_RANGE_PATTERN.match(value)
            if match is None:
                raise InvalidRangeError("Range must have the form <start>-<end>", range_value=value)
            spec = cls(match.group(1), match.group(2))
            spec.bounds()
            return spec

        tokens = value.split("-")
        return cls(tokens[0], tokens[1] if len(tokens) > 1 else "")

    def bounds(self) -> Tuple[int, int]:
        """Return the window as an inclusive ``(start, end)`` integer pair."""
        try:
            start, end = int(self.start), int(self.end)
        except ValueError as e:
            raise InvalidRangeError("Range bounds must be integers", range_value=str(self)) from e

        if start < 0 or start > end:
            raise InvalidRangeError("Range start must not exceed range end", range_value=str(self))
        return start, end


class PaginationContext(BaseModel):
    """Request-scoped pagination state.

    The paginate wrapper fills ``range`` and ``range_unit`` before the handler
    runs. The handler may set any of the override fields to change the
    partial-content headers; an override left at ``None`` falls back to the
    inbound value.
    """

    model_config = ConfigDict(validate_assignment=True)

    range: RangeSpec = Field(..., description="Requested window")
    range_unit: str = Field(..., description="Unit the window is expressed in")

    total: Optional[Union[int, str]] = Field(None, description="Size of the whole collection")
    return_range: Optional[Tuple[Any, Any]] = Field(None, description="Window actually returned")
    return_range_unit: Optional[str] = Field(None, description="Unit of the returned window")
    accept_ranges: Optional[str] = Field(None, description="Units the resource accepts")

    @property
    def content_range_total(self) -> str:
        return WILDCARD_TOTAL if self.total is None else str(self.total)

    @property
    def content_range(self) -> str:
        returned = self.return_range if self.return_range is not None else self.range
        return f"{returned[0]}-{returned[1]}/{self.content_range_total}"

    @property
    def response_range_unit(self) -> str:
        return self.return_range_unit if self.return_range_unit is not None else self.range_unit

    @property
    def response_accept_ranges(self) -> str:
        return self.accept_ranges if self.accept_ranges is not None else self.range_unit


class PaginationOptions(BaseModel):
    """Per-route paginate behaviour."""

    model_config = ConfigDict(frozen=True)

    ajax_only: bool = Field(default=True, description="Only paginate X-Requested-With: XMLHttpRequest requests")
    mode: PaginationMode = Field(default=PaginationMode.HEADERS, description="Where Range and Range-Unit are read")
    strict_range: bool = Field(default=False, description="Reject malformed Range values with 400")

    @classmethod
    def resolve(cls, settings: Settings, **overrides: Any) -> "PaginationOptions":
        """Build options from the global settings, letting non-None overrides win."""
        values = {
            "ajax_only": settings.PAGINATION_AJAX_ONLY,
            "mode": settings.PAGINATION_MODE,
            "strict_range": settings.PAGINATION_STRICT_RANGE,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
