"""Public schema exports."""

from .category import CategoryCreate, CategoryDetailResponse, CategoryQuery, CategoryResponse, CategoryUpdate
from .color import ColorCreate, ColorDetailResponse, ColorQuery, ColorResponse, ColorUpdate
from .common import Page, PageQuery, PaginationMeta
from .material import (
    MATERIAL_UNITS,
    MaterialCostRequest,
    MaterialCostResponse,
    MaterialCreate,
    MaterialQuery,
    MaterialResponse,
    MaterialUpdate,
)
from .media import ImageFile, UploadResult
from .product import (
    ProductCreate,
    ProductQuery,
    ProductResponse,
    ProductStatusUpdate,
    ProductSummary,
    ProductUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryDetailResponse",
    "CategoryQuery",
    "CategoryResponse",
    "CategoryUpdate",
    "ColorCreate",
    "ColorDetailResponse",
    "ColorQuery",
    "ColorResponse",
    "ColorUpdate",
    "Page",
    "PageQuery",
    "PaginationMeta",
    "MATERIAL_UNITS",
    "MaterialCostRequest",
    "MaterialCostResponse",
    "MaterialCreate",
    "MaterialQuery",
    "MaterialResponse",
    "MaterialUpdate",
    "ImageFile",
    "UploadResult",
    "ProductCreate",
    "ProductQuery",
    "ProductResponse",
    "ProductStatusUpdate",
    "ProductSummary",
    "ProductUpdate",
]
