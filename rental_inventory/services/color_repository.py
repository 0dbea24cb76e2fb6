"""Color repository for database access."""
from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from rental_inventory.models.color import Color
from rental_inventory.models.product import Product
from rental_inventory.schemas.color import ColorCreate, ColorQuery


class ColorRepository:
    """Handles database operations for Color entities."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, color_id: UUID) -> Color | None:
        return self._session.get(Color, color_id)

    def get_active(self, color_id: UUID) -> Color | None:
        return (
            self._session.query(Color)
            .filter(Color.id == color_id, Color.is_active.is_(True))
            .first()
        )

    def list_with_filters(self, query: ColorQuery) -> tuple[Sequence[Color], int]:
        q = self._session.query(Color).filter(Color.is_active.is_(query.is_active))
        if query.search:
            pattern = f"%{query.search}%"
            q = q.filter(or_(Color.name.ilike(pattern), Color.description.ilike(pattern)))

        total = q.count()
        colors = q.order_by(Color.name.asc()).limit(query.limit).offset(query.offset).all()
        return colors, total

    def active_products(self, color_id: UUID) -> Sequence[Product]:
        return (
            self._session.query(Product)
            .filter(Product.color_id == color_id, Product.is_active.is_(True))
            .order_by(Product.code.asc())
            .all()
        )

    def create(self, data: ColorCreate, *, created_by: str) -> Color:
        color = Color(
            name=data.name,
            hex_code=data.hex_code,
            description=data.description,
            is_active=True,
            created_by=created_by,
        )
        self._session.add(color)
        self._session.commit()
        self._session.refresh(color)
        return color

    def update(self, color: Color, changes: dict[str, Any]) -> Color:
        for field, value in changes.items():
            if value is None and field == "name":
                continue
            setattr(color, field, value)
        self._session.commit()
        self._session.refresh(color)
        return color

    def soft_delete(self, color: Color) -> Color:
        color.is_active = False
        self._session.commit()
        self._session.refresh(color)
        return color
