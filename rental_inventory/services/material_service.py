"""Material lifecycle plus cost helpers used when pricing products."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from rental_inventory.core.errors import NotFoundError
from rental_inventory.core.logging import ServiceLogger
from rental_inventory.models.material import Material
from rental_inventory.schemas.common import Page
from rental_inventory.schemas.material import (
    MaterialCostRequest,
    MaterialCostResponse,
    MaterialCreate,
    MaterialQuery,
    MaterialResponse,
    MaterialUpdate,
)

from .base import EntityService
from .guards import EntityKind
from .material_repository import MaterialRepository
from .product_repository import ProductRepository, to_decimal
from .validation import validate_payload

Payload = Mapping[str, Any] | BaseModel


class MaterialService(EntityService):
    """Business rules for materials. Names are unique case-insensitively among active rows."""

    def __init__(self, session: Session, actor_id: str, *, logger: ServiceLogger | None = None) -> None:
        super().__init__(session, actor_id, logger=logger)
        self._materials = MaterialRepository(session)
        self._products = ProductRepository(session)

    def create(self, data: Payload) -> MaterialResponse:
        payload = validate_payload(MaterialCreate, data)
        with self._database("menyimpan material"):
            self._unique.ensure_unique(EntityKind.MATERIAL, payload.name)
            material = self._materials.create(payload, created_by=self._actor_id)

        self._logger.info("material.created", f"Material {material.name} created", {"material_id": material.id})
        return MaterialResponse.model_validate(material)

    def update(self, material_id: UUID | str, patch: Payload) -> MaterialResponse:
        """Update a material; a price change also refreshes dependent product costs."""
        material = self._load_active(material_id)
        changes = validate_payload(MaterialUpdate, patch).model_dump(exclude_unset=True)

        with self._database("memperbarui material"):
            new_name = changes.get("name")
            if new_name is not None and new_name != material.name:
                self._unique.ensure_unique(EntityKind.MATERIAL, new_name, exclude_id=material.id)
            if changes.get("is_active") is False:
                self._dependencies.ensure_deletable(EntityKind.MATERIAL, material.id)

            new_price = to_decimal(changes.get("price_per_unit"))
            price_changed = new_price is not None and new_price != material.price_per_unit

            material = self._materials.update(material, changes, commit=False)
            recalculated = 0
            if price_changed:
                recalculated = self._products.recalculate_material_cost(material.id, new_price)
            self._session.commit()
            self._session.refresh(material)

        self._logger.info(
            "material.updated",
            f"Material {material.name} updated",
            {"material_id": material.id, "products_recalculated": recalculated},
        )
        return MaterialResponse.model_validate(material)

    def update_price(self, material_id: UUID | str, new_price: float) -> MaterialResponse:
        """Change the unit price and recalculate ``material_cost`` of active products."""
        return self.update(material_id, {"price_per_unit": new_price})

    def delete(self, material_id: UUID | str) -> bool:
        """Soft delete a material no active product uses.

        Raises:
            NotFoundError: If the material is absent or already inactive
            ConflictError: If active products still use it
        """
        material = self._load_active(material_id)
        with self._database("menghapus material"):
            self._dependencies.ensure_deletable(EntityKind.MATERIAL, material.id)
            self._materials.soft_delete(material)

        self._logger.info("material.deleted", f"Material {material.name} deactivated", {"material_id": material.id})
        return True

    def get_by_id(self, material_id: UUID | str) -> MaterialResponse:
        material_id = self._parse_id(material_id)
        with self._database("memuat material"):
            material = self._materials.get_by_id(material_id)
        if material is None:
            raise NotFoundError("Material tidak ditemukan", {"type": "Material", "id": str(material_id)})
        return MaterialResponse.model_validate(material)

    def list(self, query: Payload | None = None) -> Page[MaterialResponse]:
        params = validate_payload(MaterialQuery, _normalise_units(query or {}))
        with self._database("memuat daftar material"):
            materials, total = self._materials.list_with_filters(params)
            items = [MaterialResponse.model_validate(m) for m in materials]
        return Page[MaterialResponse].build(items, page=params.page, limit=params.limit, total=total)

    def get_active_materials(self) -> list[MaterialResponse]:
        """All active materials ordered by name, for selection lists."""
        with self._database("memuat daftar material"):
            return [MaterialResponse.model_validate(m) for m in self._materials.list_active()]

    def calculate_cost(self, material_id: UUID | str, quantity: int) -> MaterialCostResponse:
        """Price ``quantity`` units of an active material, rounded to 2 decimals."""
        request = validate_payload(MaterialCostRequest, {"material_id": str(material_id), "quantity": quantity})
        material = self._load_active(request.material_id)

        total = (material.price_per_unit * request.quantity).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return MaterialCostResponse(
            material_id=material.id,
            material_name=material.name,
            unit=material.unit,
            price_per_unit=float(material.price_per_unit),
            quantity=request.quantity,
            total_cost=float(total),
        )

    def _load_active(self, material_id: UUID | str) -> Material:
        material_id = self._parse_id(material_id)
        with self._database("memuat material"):
            material = self._materials.get_active(material_id)
        if material is None:
            raise NotFoundError("Material tidak ditemukan", {"type": "Material", "id": str(material_id)})
        return material


def _normalise_units(query: Payload) -> Payload:
    """Allow ``unit`` to be given as a single value or a list."""
    if isinstance(query, Mapping) and isinstance(query.get("unit"), str):
        return {**query, "unit": [query["unit"]]}
    return query
