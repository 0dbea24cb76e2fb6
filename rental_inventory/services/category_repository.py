"""Category repository for database access."""
from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from rental_inventory.models.category import Category
from rental_inventory.models.product import Product
from rental_inventory.schemas.category import CategoryCreate, CategoryQuery


class CategoryRepository:
    """Handles database operations for Category entities."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, category_id: UUID) -> Category | None:
        return self._session.get(Category, category_id)

    def list_with_filters(self, query: CategoryQuery) -> tuple[Sequence[Category], int]:
        """Fetch categories ordered by name, optionally narrowed by a search term."""
        q = self._session.query(Category)
        if query.search:
            q = q.filter(Category.name.ilike(f"%{query.search}%"))

        total = q.count()
        categories = q.order_by(Category.name.asc()).limit(query.limit).offset(query.offset).all()
        return categories, total

    def active_products(self, category_id: UUID) -> Sequence[Product]:
        return (
            self._session.query(Product)
            .filter(Product.category_id == category_id, Product.is_active.is_(True))
            .order_by(Product.code.asc())
            .all()
        )

    def create(self, data: CategoryCreate, *, created_by: str) -> Category:
        category = Category(name=data.name, color=data.color, created_by=created_by)
        self._session.add(category)
        self._session.commit()
        self._session.refresh(category)
        return category

    def update(self, category: Category, changes: dict[str, Any]) -> Category:
        for field, value in changes.items():
            if value is not None:
                setattr(category, field, value)
        self._session.commit()
        self._session.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        """Remove the category row permanently."""
        self._session.delete(category)
        self._session.commit()
