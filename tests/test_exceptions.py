"""Tests for the exception handlers."""

import asyncio

from starlette.requests import Request

from range_pagination.exceptions import handlers


def make_request(path: str = "/api/v1/items") -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


class RecordingLogger:
    def __init__(self):
        self.calls = []

    def exception(self, event, **kwargs):
        self.calls.append(("exception", event, kwargs))

    def warning(self, event, **kwargs):
        self.calls.append(("warning", event, kwargs))


class TestGenericExceptionHandler:
    def test_logs_traceback_and_renders_envelope(self, monkeypatch):
        """Unexpected errors are logged with their traceback and answered with 500."""
        recorder = RecordingLogger()
        monkeypatch.setattr(handlers, "logger", recorder)

        try:
            raise RuntimeError("database on fire")
        except RuntimeError as exc:
            response = asyncio.run(handlers.generic_exception_handler(make_request(), exc))

        assert response.status_code == 500
        assert [(level, event) for level, event, _ in recorder.calls] == [
            ("exception", "Unexpected exception occurred"),
        ]
        assert recorder.calls[0][2]["error_type"] == "RuntimeError"
        assert recorder.calls[0][2]["path"] == "/api/v1/items"


class TestRangeNotSatisfiableHandler:
    def test_content_range_header(self, monkeypatch):
        monkeypatch.setattr(handlers, "logger", RecordingLogger())
        exc = handlers.RangeNotSatisfiableError(range_value="300-310", total=250)

        response = asyncio.run(handlers.range_pagination_exception_handler(make_request(), exc))

        assert response.status_code == 416
        assert response.headers["Content-Range"] == "*/250"
