"""Pydantic schemas for material resources."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, get_args
from uuid import UUID

from pydantic import ConfigDict, Field

from .common import CamelModel, Money, PageQuery, PositiveMoney

MaterialUnit = Literal["meter", "yard", "kg", "gram", "pcs", "roll", "lusin"]
MATERIAL_UNITS: tuple[str, ...] = get_args(MaterialUnit)


class MaterialCreate(CamelModel):
    name: str = Field(min_length=2, max_length=50)
    price_per_unit: PositiveMoney
    unit: MaterialUnit


class MaterialUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    price_per_unit: PositiveMoney | None = None
    unit: MaterialUnit | None = None
    is_active: bool | None = None


class MaterialQuery(PageQuery):
    is_active: bool = True
    unit: list[MaterialUnit] | None = None


class MaterialCostRequest(CamelModel):
    material_id: UUID
    quantity: int = Field(gt=0, le=99999)


class MaterialResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    price_per_unit: Money
    unit: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    created_by: str


class MaterialCostResponse(CamelModel):
    material_id: UUID
    material_name: str
    unit: str
    price_per_unit: float
    quantity: int
    total_cost: float
