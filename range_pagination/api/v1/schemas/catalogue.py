"""Catalogue API schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class PageResponse(BaseModel):
    """Range the handler observed."""

    start: Optional[str] = Field(None, description="Requested range start")
    end: Optional[str] = Field(None, description="Requested range end")
    unit: Optional[str] = Field(None, description="Requested range unit")


class ItemResponse(BaseModel):
    """A catalogue item."""

    id: int = Field(..., description="Item index")
    name: str = Field(..., description="Item name")
