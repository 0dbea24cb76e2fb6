"""Category lifecycle. Categories are hard-deleted once no active product uses them."""
from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from rental_inventory.core.errors import ConflictError, NotFoundError
from rental_inventory.core.logging import ServiceLogger
from rental_inventory.models.category import Category
from rental_inventory.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryQuery,
    CategoryResponse,
    CategoryUpdate,
)
from rental_inventory.schemas.common import Page
from rental_inventory.schemas.product import ProductSummary

from .base import EntityService
from .category_repository import CategoryRepository
from .guards import EntityKind
from .validation import validate_payload

Payload = Mapping[str, Any] | BaseModel


class CategoryService(EntityService):
    """Business rules for product categories."""

    def __init__(self, session: Session, actor_id: str, *, logger: ServiceLogger | None = None) -> None:
        super().__init__(session, actor_id, logger=logger)
        self._categories = CategoryRepository(session)

    def create(self, data: Payload) -> CategoryResponse:
        payload = validate_payload(CategoryCreate, data)
        with self._database("menyimpan kategori"):
            self._unique.ensure_unique(EntityKind.CATEGORY, payload.name)
            category = self._categories.create(payload, created_by=self._actor_id)

        self._logger.info("category.created", f"Category {category.name} created", {"category_id": category.id})
        return CategoryResponse.model_validate(category)

    def update(self, category_id: UUID | str, patch: Payload) -> CategoryResponse:
        category = self._load(category_id)
        changes = validate_payload(CategoryUpdate, patch).model_dump(exclude_unset=True)

        with self._database("memperbarui kategori"):
            new_name = changes.get("name")
            if new_name is not None and new_name != category.name:
                self._unique.ensure_unique(EntityKind.CATEGORY, new_name, exclude_id=category.id)
            category = self._categories.update(category, changes)

        self._logger.info("category.updated", f"Category {category.name} updated", {"category_id": category.id})
        return CategoryResponse.model_validate(category)

    def delete(self, category_id: UUID | str) -> bool:
        """Hard delete a category that no active product references.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If active products still use it (message carries the count)
        """
        category = self._load(category_id)
        conflict = ConflictError(
            "Kategori tidak dapat dihapus karena masih direferensikan oleh produk nonaktif",
            {"kind": EntityKind.CATEGORY.value, "id": str(category.id)},
        )
        with self._database("menghapus kategori", conflict):
            self._dependencies.ensure_deletable(EntityKind.CATEGORY, category.id)
            self._categories.delete(category)

        self._logger.info("category.deleted", f"Category {category.name} deleted", {"category_id": category.id})
        return True

    def get_by_id(self, category_id: UUID | str) -> CategoryDetailResponse:
        category = self._load(category_id)
        with self._database("memuat kategori"):
            return self._detail(category)

    def list(self, query: Payload | None = None) -> Page[CategoryResponse] | Page[CategoryDetailResponse]:
        params = validate_payload(CategoryQuery, query or {})
        with self._database("memuat daftar kategori"):
            categories, total = self._categories.list_with_filters(params)
            if params.include_products:
                details = [self._detail(c) for c in categories]
                return Page[CategoryDetailResponse].build(details, page=params.page, limit=params.limit, total=total)
            items = [CategoryResponse.model_validate(c) for c in categories]
        return Page[CategoryResponse].build(items, page=params.page, limit=params.limit, total=total)

    def _load(self, category_id: UUID | str) -> Category:
        category_id = self._parse_id(category_id)
        with self._database("memuat kategori"):
            category = self._categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Kategori tidak ditemukan", {"type": "Category", "id": str(category_id)})
        return category

    def _detail(self, category: Category) -> CategoryDetailResponse:
        products = [ProductSummary.model_validate(p) for p in self._categories.active_products(category.id)]
        return CategoryDetailResponse(**CategoryResponse.model_validate(category).model_dump(), products=products)
