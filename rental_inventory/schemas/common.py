"""Shared schema building blocks: base config, money coercion, pagination."""
from __future__ import annotations

import re
from decimal import Decimal
from math import ceil
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
MAX_MONEY = 999_999_999

T = TypeVar("T")


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys; dumps camelCase with ``by_alias``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


def _decimal_to_float(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


def _check_hex_color(value: str) -> str:
    if not HEX_COLOR_PATTERN.match(value):
        raise ValueError("Warna harus dalam format hex (#RRGGBB)")
    return value


# Monetary value read from a NUMERIC column; always surfaced as a number.
Money = Annotated[float, BeforeValidator(_decimal_to_float)]
HexColor = Annotated[str, AfterValidator(_check_hex_color)]
PositiveMoney = Annotated[float, Field(gt=0, le=MAX_MONEY)]


class PageQuery(CamelModel):
    """Pagination parameters shared by every list operation."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    search: str | None = Field(default=None, max_length=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class Page(CamelModel, Generic[T]):
    """Paginated response wrapper for list operations."""

    items: list[T]
    pagination: PaginationMeta

    @classmethod
    def build(cls, items: list[T], *, page: int, limit: int, total: int) -> "Page[T]":
        return cls(
            items=items,
            pagination=PaginationMeta(page=page, limit=limit, total=total, total_pages=ceil(total / limit)),
        )
