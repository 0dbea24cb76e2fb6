"""Material repository for database access."""
from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from rental_inventory.models.material import Material
from rental_inventory.schemas.material import MaterialCreate, MaterialQuery

from .product_repository import to_decimal


class MaterialRepository:
    """Handles database operations for Material entities."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, material_id: UUID) -> Material | None:
        return self._session.get(Material, material_id)

    def get_active(self, material_id: UUID) -> Material | None:
        return (
            self._session.query(Material)
            .filter(Material.id == material_id, Material.is_active.is_(True))
            .first()
        )

    def list_with_filters(self, query: MaterialQuery) -> tuple[Sequence[Material], int]:
        """Fetch materials newest first, filtered by activity, unit and search term."""
        q = self._session.query(Material).filter(Material.is_active.is_(query.is_active))

        if query.unit:
            q = q.filter(Material.unit.in_(query.unit))
        if query.search:
            pattern = f"%{query.search}%"
            q = q.filter(or_(Material.name.ilike(pattern), Material.unit.ilike(pattern)))

        total = q.count()
        materials = q.order_by(Material.created_at.desc()).limit(query.limit).offset(query.offset).all()
        return materials, total

    def list_active(self) -> Sequence[Material]:
        return (
            self._session.query(Material)
            .filter(Material.is_active.is_(True))
            .order_by(Material.name.asc())
            .all()
        )

    def create(self, data: MaterialCreate, *, created_by: str) -> Material:
        material = Material(
            name=data.name,
            price_per_unit=to_decimal(data.price_per_unit),
            unit=data.unit,
            is_active=True,
            created_by=created_by,
        )
        self._session.add(material)
        self._session.commit()
        self._session.refresh(material)
        return material

    def update(self, material: Material, changes: dict[str, Any], *, commit: bool = True) -> Material:
        for field, value in changes.items():
            if value is None:
                continue
            if field == "price_per_unit":
                value = to_decimal(value)
            setattr(material, field, value)
        if commit:
            self._session.commit()
            self._session.refresh(material)
        return material

    def soft_delete(self, material: Material) -> Material:
        material.is_active = False
        self._session.commit()
        self._session.refresh(material)
        return material
