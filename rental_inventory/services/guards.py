"""Uniqueness and dependency guards run before entity writes.

Both guards are point-in-time reads followed by a separate write, so two
concurrent requests can pass the same check. Product codes are additionally
protected by the ``uq_products_code_active`` index; the other keys rely on
these checks alone.
"""
from __future__ import annotations

from enum import Enum
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from rental_inventory.core.errors import ConflictError
from rental_inventory.models import Category, Color, Material, Product


class EntityKind(str, Enum):
    PRODUCT = "product"
    CATEGORY = "category"
    MATERIAL = "material"
    COLOR = "color"


# kind -> (model, key column, field name, case-insensitive, scoped to active rows)
_UNIQUE_KEYS = {
    EntityKind.PRODUCT: (Product, Product.code, "code", False, True),
    EntityKind.CATEGORY: (Category, Category.name, "name", False, False),
    EntityKind.MATERIAL: (Material, Material.name, "name", True, True),
    EntityKind.COLOR: (Color, Color.name, "name", True, True),
}

_CONFLICT_MESSAGES = {
    EntityKind.PRODUCT: "Kode produk {value} sudah digunakan",
    EntityKind.CATEGORY: 'Nama kategori "{value}" sudah digunakan',
    EntityKind.MATERIAL: 'Material dengan nama "{value}" sudah ada',
    EntityKind.COLOR: 'Nama warna "{value}" sudah digunakan',
}

_REFERENCE_COLUMNS = {
    EntityKind.CATEGORY: Product.category_id,
    EntityKind.MATERIAL: Product.material_id,
    EntityKind.COLOR: Product.color_id,
}

_IN_USE_MESSAGES = {
    EntityKind.CATEGORY: "Kategori tidak dapat dihapus karena masih memiliki {count} produk aktif",
    EntityKind.MATERIAL: "Material tidak dapat dihapus karena sedang digunakan oleh {count} produk",
    EntityKind.COLOR: "Warna tidak dapat dihapus karena masih memiliki {count} produk aktif",
}


class UniquenessGuard:
    """Checks that a name/code is not already held by another live record."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def check_unique(self, kind: EntityKind, candidate_key: str, exclude_id: UUID | None = None) -> bool:
        """Return True when no other matching record holds ``candidate_key``.

        Args:
            kind: Entity type whose key is checked
            candidate_key: Proposed name or code
            exclude_id: Id of the record being updated, never a conflict with itself
        """
        model, column, _, fold_case, active_only = _UNIQUE_KEYS[kind]

        q = self._session.query(model.id)
        if fold_case:
            q = q.filter(func.lower(column) == candidate_key.lower())
        else:
            q = q.filter(column == candidate_key)
        if active_only:
            q = q.filter(model.is_active.is_(True))
        if exclude_id is not None:
            q = q.filter(model.id != exclude_id)

        return q.first() is None

    def ensure_unique(self, kind: EntityKind, candidate_key: str, exclude_id: UUID | None = None) -> None:
        """Raise ConflictError if ``candidate_key`` is taken."""
        if self.check_unique(kind, candidate_key, exclude_id):
            return
        field = _UNIQUE_KEYS[kind][2]
        raise ConflictError.unique_constraint(
            field,
            candidate_key,
            _CONFLICT_MESSAGES[kind].format(value=candidate_key),
        )


class DependencyGuard:
    """Blocks deletion of categories, materials and colors still in use."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def count_active_references(self, kind: EntityKind, entity_id: UUID) -> int:
        """Count active products pointing at the entity."""
        column = _REFERENCE_COLUMNS[kind]
        return (
            self._session.query(func.count(Product.id))
            .filter(column == entity_id, Product.is_active.is_(True))
            .scalar()
        ) or 0

    def ensure_deletable(self, kind: EntityKind, entity_id: UUID) -> None:
        count = self.count_active_references(kind, entity_id)
        if count > 0:
            raise ConflictError(
                _IN_USE_MESSAGES[kind].format(count=count),
                {"kind": kind.value, "id": str(entity_id), "active_products": count},
            )
