"""Shared fixtures for the range pagination tests."""

from typing import Callable

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from range_pagination.exceptions import RangePaginationError, range_pagination_exception_handler
from range_pagination.server import create_app

AJAX = {"X-Requested-With": "XMLHttpRequest"}


@pytest.fixture
def ajax_headers() -> Callable[..., dict]:
    """Build AJAX request headers, optionally with Range and Range-Unit."""

    def _build(range_value: str | None = None, range_unit: str | None = None) -> dict:
        headers = dict(AJAX)
        if range_value is not None:
            headers["Range"] = range_value
        if range_unit is not None:
            headers["Range-Unit"] = range_unit
        return headers

    return _build


@pytest.fixture
def client_for() -> Callable[[APIRouter], TestClient]:
    """Serve a router from a bare FastAPI app, with only the pagination error handler installed."""

    def _build(router: APIRouter) -> TestClient:
        app = FastAPI()
        app.add_exception_handler(RangePaginationError, range_pagination_exception_handler)  # type: ignore
        app.include_router(router)
        return TestClient(app)

    return _build


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app) as test_client:
        yield test_client
