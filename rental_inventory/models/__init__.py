"""ORM models exposed for external modules."""
from .base import Base
from .category import Category
from .color import Color
from .material import Material
from .product import Product, ProductStatus

__all__ = [
    "Base",
    "Category",
    "Color",
    "Material",
    "Product",
    "ProductStatus",
]
