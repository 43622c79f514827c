"""Catalogue API routes served through the paginate wrapper."""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from range_pagination.api.v1.schemas import ItemResponse, PageResponse
from range_pagination.config import PaginationMode
from range_pagination.logging import get_logger
from range_pagination.middlewares.pagination import paginate
from range_pagination.schemas.pagination import PaginationContext
from range_pagination.utils.pagination import slice_by_range

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Catalogue"])

CATALOGUE = [ItemResponse(id=index, name=f"item-{index}") for index in range(250)]


@router.get("/", response_class=PlainTextResponse, summary="Paginated index")
@paginate
async def index() -> str:
    return "Index ok"


@router.get("/page", response_model=PageResponse, summary="Echo the requested range")
@paginate
async def page(pagination: Optional[PaginationContext] = None) -> PageResponse:
    """Return the range and unit the handler received."""
    if pagination is None:
        return PageResponse()
    return PageResponse(start=pagination.range.start, end=pagination.range.end, unit=pagination.range_unit)


@router.get("/total", summary="Report a fixed collection size")
@paginate
async def total(pagination: Optional[PaginationContext] = None) -> dict:
    if pagination is not None:
        pagination.total = "100"
    return {"total": "100"}


@router.get("/range", summary="Report a fixed returned range")
@paginate
async def returned_range(pagination: Optional[PaginationContext] = None) -> dict:
    if pagination is not None:
        pagination.return_range = (0, 100)
    return {"start": 0, "end": 100}


@router.get("/items", response_model=list[ItemResponse], summary="List catalogue items")
@paginate(mode=PaginationMode.BOTH)
def list_items(pagination: Optional[PaginationContext] = None) -> list[ItemResponse]:
    """List catalogue items, honouring Range from headers or query parameters.

    The range selects item indexes, both ends inclusive. Without a range the
    whole catalogue is returned.
    """
    items = slice_by_range(CATALOGUE, pagination)
    logger.debug("Catalogue sliced", returned=len(items), total=len(CATALOGUE))
    return items
