"""Color lifecycle service."""
from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from rental_inventory.core.errors import NotFoundError
from rental_inventory.core.logging import ServiceLogger
from rental_inventory.models.color import Color
from rental_inventory.schemas.color import (
    ColorCreate,
    ColorDetailResponse,
    ColorQuery,
    ColorResponse,
    ColorUpdate,
)
from rental_inventory.schemas.common import Page
from rental_inventory.schemas.product import ProductSummary

from .base import EntityService
from .color_repository import ColorRepository
from .guards import EntityKind
from .validation import validate_payload

Payload = Mapping[str, Any] | BaseModel


class ColorService(EntityService):
    def __init__(self, session: Session, actor_id: str, *, logger: ServiceLogger | None = None) -> None:
        super().__init__(session, actor_id, logger=logger)
        self._colors = ColorRepository(session)

    def create(self, data: Payload) -> ColorResponse:
        payload = validate_payload(ColorCreate, data)
        with self._database("menyimpan warna"):
            self._unique.ensure_unique(EntityKind.COLOR, payload.name)
            color = self._colors.create(payload, created_by=self._actor_id)

        self._logger.info("color.created", f"Color {color.name} created", {"color_id": color.id})
        return ColorResponse.model_validate(color)

    def update(self, color_id: UUID | str, patch: Payload) -> ColorResponse:
        color = self._load_active(color_id)
        changes = validate_payload(ColorUpdate, patch).model_dump(exclude_unset=True)

        with self._database("memperbarui warna"):
            new_name = changes.get("name")
            if new_name is not None and new_name != color.name:
                self._unique.ensure_unique(EntityKind.COLOR, new_name, exclude_id=color.id)
            color = self._colors.update(color, changes)

        self._logger.info("color.updated", f"Color {color.name} updated", {"color_id": color.id})
        return ColorResponse.model_validate(color)

    def delete(self, color_id: UUID | str) -> bool:
        """Soft delete a color once no active product uses it."""
        color = self._load_active(color_id)
        with self._database("menghapus warna"):
            self._dependencies.ensure_deletable(EntityKind.COLOR, color.id)
            self._colors.soft_delete(color)

        self._logger.info("color.deleted", f"Color {color.name} deactivated", {"color_id": color.id})
        return True

    def get_by_id(self, color_id: UUID | str) -> ColorDetailResponse:
        color_id = self._parse_id(color_id)
        with self._database("memuat warna"):
            color = self._colors.get_by_id(color_id)
            if color is None:
                raise NotFoundError("Warna tidak ditemukan", {"type": "Color", "id": str(color_id)})
            return self._detail(color)

    def list(self, query: Payload | None = None) -> Page[ColorResponse] | Page[ColorDetailResponse]:
        params = validate_payload(ColorQuery, query or {})
        with self._database("memuat daftar warna"):
            colors, total = self._colors.list_with_filters(params)
            if params.include_products:
                details = [self._detail(c) for c in colors]
                return Page[ColorDetailResponse].build(details, page=params.page, limit=params.limit, total=total)
            items = [ColorResponse.model_validate(c) for c in colors]
        return Page[ColorResponse].build(items, page=params.page, limit=params.limit, total=total)

    def _load_active(self, color_id: UUID | str) -> Color:
        color_id = self._parse_id(color_id)
        with self._database("memuat warna"):
            color = self._colors.get_active(color_id)
        if color is None:
            raise NotFoundError("Warna tidak ditemukan", {"type": "Color", "id": str(color_id)})
        return color

    def _detail(self, color: Color) -> ColorDetailResponse:
        products = [ProductSummary.model_validate(p) for p in self._colors.active_products(color.id)]
        return ColorDetailResponse(**ColorResponse.model_validate(color).model_dump(), products=products)
