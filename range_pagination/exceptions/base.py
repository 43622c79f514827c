from typing import Any, Dict, Optional


class RangePaginationError(Exception):
    """Base exception class for range pagination."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidRangeError(RangePaginationError):
    """Raised when a Range value cannot be read as a start-end pair."""

    def __init__(
        self,
        message: str = "Invalid range",
        range_value: Optional[str] = None,
        **kwargs,
    ) -> None:
        details = kwargs.pop("details", {})
        if range_value is not None:
            details["range"] = str(range_value)
        super().__init__(message, details=details, **kwargs)


class RangeNotSatisfiableError(RangePaginationError):
    """Raised when a range starts beyond the end of the collection."""

    def __init__(
        self,
        message: str = "Range not satisfiable",
        range_value: Optional[str] = None,
        total: Optional[int] = None,
        **kwargs,
    ) -> None:
        details = kwargs.pop("details", {})
        if range_value is not None:
            details["range"] = str(range_value)
        if total is not None:
            details["total"] = total
        super().__init__(message, details=details, **kwargs)
