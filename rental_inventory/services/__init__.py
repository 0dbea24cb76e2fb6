"""Services module for business logic."""
from __future__ import annotations

from .category_service import CategoryService
from .color_service import ColorService
from .guards import DependencyGuard, EntityKind, UniquenessGuard
from .material_service import MaterialService
from .media_service import MediaService
from .product_repository import ProductRepository
from .product_service import ProductService

__all__ = [
    "CategoryService",
    "ColorService",
    "DependencyGuard",
    "EntityKind",
    "MaterialService",
    "MediaService",
    "ProductRepository",
    "ProductService",
    "UniquenessGuard",
]
