"""Pydantic schemas for color resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from .common import CamelModel, HexColor, PageQuery
from .product import ProductSummary


class ColorCreate(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    hex_code: HexColor | None = None
    description: str | None = Field(default=None, max_length=200)


class ColorUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    hex_code: HexColor | None = None
    description: str | None = Field(default=None, max_length=200)


class ColorQuery(PageQuery):
    is_active: bool = True
    include_products: bool = False


class ColorResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    hex_code: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    created_by: str


class ColorDetailResponse(ColorResponse):
    """Color together with the active products using it."""

    products: list[ProductSummary] = Field(default_factory=list)
