"""Tests for the paginate sources and AJAX gate."""

from typing import Optional

import pytest
from fastapi import APIRouter

from range_pagination.config import PaginationMode, Settings
from range_pagination.middlewares import pagination as pagination_module
from range_pagination.middlewares.pagination import paginate
from range_pagination.schemas.pagination import PaginationContext, PaginationOptions

router = APIRouter()


def _echo(pagination: Optional[PaginationContext]) -> dict:
    if pagination is None:
        return {"paginated": False}
    return {"range": str(pagination.range), "unit": pagination.range_unit}


@router.get("/headers")
@paginate(mode=PaginationMode.HEADERS)
async def from_headers(pagination: Optional[PaginationContext] = None) -> dict:
    return _echo(pagination)


@router.get("/parameters")
@paginate(mode=PaginationMode.PARAMETERS)
async def from_parameters(pagination: Optional[PaginationContext] = None) -> dict:
    return _echo(pagination)


@router.get("/both")
@paginate(mode=PaginationMode.BOTH)
async def from_both(pagination: Optional[PaginationContext] = None) -> dict:
    return _echo(pagination)


@router.get("/anyone")
@paginate(ajax_only=False)
async def for_anyone(pagination: Optional[PaginationContext] = None) -> dict:
    return _echo(pagination)


@pytest.fixture
def client(client_for):
    return client_for(router)


class TestHeadersMode:
    def test_query_parameters_ignored(self, client, ajax_headers):
        """Header mode does not look at the query string."""
        response = client.get("/headers", params={"range": "0-4", "range_unit": "items"}, headers=ajax_headers())

        assert response.status_code == 200
        assert response.json() == {"paginated": False}


class TestParametersMode:
    def test_query_parameters_used(self, client, ajax_headers):
        """Range and unit come from the query string."""
        response = client.get("/parameters", params={"range": "0-4", "range_unit": "items"}, headers=ajax_headers())

        assert response.status_code == 206
        assert response.json() == {"range": "0-4", "unit": "items"}
        assert response.headers["Content-Range"] == "0-4/*"

    def test_headers_ignored(self, client, ajax_headers):
        """Parameter mode does not look at the Range headers."""
        response = client.get("/parameters", headers=ajax_headers("0-4", "items"))

        assert response.status_code == 200
        assert "Content-Range" not in response.headers

    def test_ajax_still_required(self, client):
        """Parameter mode keeps the AJAX gate."""
        response = client.get("/parameters", params={"range": "0-4", "range_unit": "items"})

        assert response.status_code == 200
        assert response.json() == {"paginated": False}


class TestBothMode:
    def test_headers_preferred(self, client, ajax_headers):
        """Headers win over query parameters."""
        response = client.get(
            "/both",
            params={"range": "50-60", "range_unit": "rows"},
            headers=ajax_headers("0-4", "items"),
        )

        assert response.json() == {"range": "0-4", "unit": "items"}
        assert response.headers["Content-Range"] == "0-4/*"

    def test_parameter_fallback(self, client, ajax_headers):
        """Query parameters are used when the headers are absent."""
        response = client.get("/both", params={"range": "50-60", "range_unit": "rows"}, headers=ajax_headers())

        assert response.status_code == 206
        assert response.json() == {"range": "50-60", "unit": "rows"}

    def test_fallback_per_value(self, client, ajax_headers):
        """Each value falls back independently."""
        response = client.get("/both", params={"range_unit": "rows"}, headers=ajax_headers("0-4"))

        assert response.status_code == 206
        assert response.json() == {"range": "0-4", "unit": "rows"}

    def test_nothing_anywhere(self, client, ajax_headers):
        """Neither source supplies a range."""
        response = client.get("/both", headers=ajax_headers())

        assert response.status_code == 200
        assert response.json() == {"paginated": False}


class TestAjaxGate:
    def test_ajax_not_required(self, client):
        """With ajax_only off any request is paginated."""
        response = client.get("/anyone", headers={"Range": "5-9", "Range-Unit": "items"})

        assert response.status_code == 206
        assert response.headers["Content-Range"] == "5-9/*"

    def test_empty_values_count_as_present(self, client):
        """Empty Range and Range-Unit values still trigger pagination."""
        response = client.get("/anyone", headers={"Range": "", "Range-Unit": ""})

        assert response.status_code == 206
        assert response.headers["Content-Range"] == "-/*"


class TestOptionsResolution:
    def test_settings_defaults(self):
        """Options default to the PAGINATION_* settings."""
        settings = Settings(
            PAGINATION_AJAX_ONLY=False,
            PAGINATION_MODE=PaginationMode.BOTH,
            PAGINATION_STRICT_RANGE=True,
        )

        options = PaginationOptions.resolve(settings)

        assert options.ajax_only is False
        assert options.mode == PaginationMode.BOTH
        assert options.strict_range is True

    def test_overrides_win(self):
        """Per-route values replace the settings."""
        settings = Settings(PAGINATION_AJAX_ONLY=False)

        options = PaginationOptions.resolve(settings, ajax_only=True, mode=PaginationMode.PARAMETERS)

        assert options.ajax_only is True
        assert options.mode == PaginationMode.PARAMETERS
        assert options.strict_range is False

    def test_none_overrides_ignored(self):
        """Unset per-route values keep the settings."""
        settings = Settings(PAGINATION_MODE=PaginationMode.PARAMETERS)

        options = PaginationOptions.resolve(settings, ajax_only=None, mode=None, strict_range=None)

        assert options.mode == PaginationMode.PARAMETERS
        assert options.ajax_only is True


class TestSettingsDefaults:
    """Routes decorated without options follow the PAGINATION_* settings."""

    @pytest.fixture
    def settings_client(self, client_for, monkeypatch):
        def _build(**values) -> object:
            monkeypatch.setattr(pagination_module, "settings", Settings(**values))
            settings_router = APIRouter()

            @settings_router.get("/configured")
            @paginate
            async def configured(pagination: Optional[PaginationContext] = None) -> dict:
                return _echo(pagination)

            return client_for(settings_router)

        return _build

    def test_ajax_only_disabled(self, settings_client):
        client = settings_client(PAGINATION_AJAX_ONLY=False)

        response = client.get("/configured", headers={"Range": "5-9", "Range-Unit": "items"})

        assert response.status_code == 206
        assert response.headers["Content-Range"] == "5-9/*"

    def test_ajax_only_enabled(self, settings_client):
        client = settings_client(PAGINATION_AJAX_ONLY=True)

        response = client.get("/configured", headers={"Range": "5-9", "Range-Unit": "items"})

        assert response.status_code == 200
        assert response.json() == {"paginated": False}

    def test_strict_range_enabled(self, settings_client, ajax_headers):
        client = settings_client(PAGINATION_STRICT_RANGE=True)

        response = client.get("/configured", headers=ajax_headers("ten-twenty", "items"))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidRangeError"

    def test_strict_range_disabled(self, settings_client, ajax_headers):
        client = settings_client(PAGINATION_STRICT_RANGE=False)

        response = client.get("/configured", headers=ajax_headers("ten-twenty", "items"))

        assert response.status_code == 206
        assert response.json() == {"range": "ten-twenty", "unit": "items"}

    def test_mode_from_settings(self, settings_client, ajax_headers):
        client = settings_client(PAGINATION_MODE=PaginationMode.PARAMETERS)

        response = client.get("/configured", params={"range": "1-2", "range_unit": "rows"}, headers=ajax_headers())

        assert response.status_code == 206
        assert response.headers["Range-Unit"] == "rows"
