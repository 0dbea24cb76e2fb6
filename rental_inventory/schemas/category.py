"""Pydantic schemas for category resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from .common import CamelModel, HexColor, PageQuery
from .product import ProductSummary


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    color: HexColor


class CategoryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    color: HexColor | None = None


class CategoryQuery(PageQuery):
    include_products: bool = False


class CategoryResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str
    created_at: datetime
    updated_at: datetime
    created_by: str


class CategoryDetailResponse(CategoryResponse):
    """Category together with its active products."""

    products: list[ProductSummary] = Field(default_factory=list)
