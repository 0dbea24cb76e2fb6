"""Pydantic schemas for product resources."""
from __future__ import annotations

import re
from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from rental_inventory.models.product import ProductStatus

from .common import CamelModel, Money, PageQuery, PositiveMoney

PRODUCT_CODE_PATTERN = re.compile(r"^[A-Z0-9]{4}$")


def _check_code(value: str) -> str:
    if not PRODUCT_CODE_PATTERN.match(value):
        raise ValueError("Kode harus 4 digit alfanumerik uppercase")
    return value


class ProductBase(CamelModel):
    """Shared attributes for product payloads."""

    name: str = Field(min_length=1, max_length=100, description="Display name for the product")
    description: str | None = Field(default=None, max_length=500)
    size: str | None = Field(default=None, max_length=20)
    modal_awal: PositiveMoney = Field(description="Acquisition cost")
    harga_sewa: PositiveMoney = Field(description="Rental price")
    quantity: int = Field(ge=0, le=9999)
    category_id: UUID
    material_id: UUID | None = None
    color_id: UUID | None = None
    material_quantity: int | None = Field(default=None, gt=0, le=99999)


class ProductCreate(ProductBase):
    """Payload used when creating a product."""

    code: str = Field(description="4 character uppercase alphanumeric code")

    @field_validator("code")
    @classmethod
    def check_code(cls, value: str) -> str:
        return _check_code(value)


class ProductUpdate(CamelModel):
    """Payload used when updating a product (all fields optional)."""

    code: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    size: str | None = Field(default=None, max_length=20)
    modal_awal: PositiveMoney | None = None
    harga_sewa: PositiveMoney | None = None
    quantity: int | None = Field(default=None, ge=0, le=9999)
    category_id: UUID | None = None
    material_id: UUID | None = None
    color_id: UUID | None = None
    material_quantity: int | None = Field(default=None, gt=0, le=99999)

    @field_validator("code")
    @classmethod
    def check_code(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return _check_code(value)


class ProductStatusUpdate(CamelModel):
    status: ProductStatus


class ProductQuery(PageQuery):
    """Filters for listing products."""

    category_id: UUID | None = None
    material_id: UUID | None = None
    color_id: UUID | None = None
    status: ProductStatus | None = None
    is_active: bool = True


class CategorySummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str


class MaterialSummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    unit: str
    price_per_unit: Money


class ColorSummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    hex_code: str | None = None


class ProductSummary(CamelModel):
    """Product without its expanded references, used inside category/color views."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    status: ProductStatus
    quantity: int
    harga_sewa: Money
    image_url: str | None = None
    is_active: bool


class ProductResponse(CamelModel):
    """Canonical product returned by the service layer."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    name: str
    description: str | None = None
    size: str | None = None
    category_id: UUID
    category: CategorySummary | None = None
    material_id: UUID | None = None
    material: MaterialSummary | None = None
    color_id: UUID | None = None
    color: ColorSummary | None = None
    material_quantity: int | None = None
    material_cost: Money | None = None
    modal_awal: Money
    harga_sewa: Money
    quantity: int
    status: ProductStatus
    image_url: str | None = None
    total_pendapatan: Money
    is_active: bool
    created_at: datetime
    updated_at: datetime
    created_by: str
