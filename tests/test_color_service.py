"""Tests for ColorService."""
from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from rental_inventory.core.errors import ConflictError, NotFoundError, ValidationError
from rental_inventory.models.color import Color
from rental_inventory.services.color_service import ColorService

from .conftest import ACTOR_ID


@pytest.fixture
def service(db_session: Session) -> ColorService:
    return ColorService(db_session, ACTOR_ID)


class TestColorService:
    def test_create(self, service: ColorService) -> None:
        color = service.create({"name": "Merah", "hexCode": "#FF0000", "description": "Merah cerah"})

        assert color.name == "Merah"
        assert color.hex_code == "#FF0000"
        assert color.is_active is True

    def test_create_without_hex(self, service: ColorService) -> None:
        assert service.create({"name": "Emas"}).hex_code is None

    def test_description_too_long(self, service: ColorService) -> None:
        with pytest.raises(ValidationError) as exc_info:
            service.create({"name": "Merah", "description": "x" * 201})

        assert exc_info.value.fields == ["description"]

    def test_duplicate_name_ignores_case(self, service: ColorService, make_color) -> None:
        make_color(name="Merah")

        with pytest.raises(ConflictError, match='Nama warna "MERAH" sudah digunakan'):
            service.create({"name": "MERAH"})

    def test_update_to_own_name(self, service: ColorService, make_color) -> None:
        color = make_color(name="Merah")

        updated = service.update(color.id, {"name": "Merah", "description": "Merah tua"})

        assert updated.description == "Merah tua"

    def test_update_inactive(self, service: ColorService, make_color) -> None:
        color = make_color(is_active=False)

        with pytest.raises(NotFoundError, match="Warna tidak ditemukan"):
            service.update(color.id, {"name": "Biru"})

    def test_delete_soft_deletes(self, service: ColorService, db_session: Session, make_color) -> None:
        color = make_color()

        assert service.delete(color.id) is True

        db_session.expire_all()
        assert db_session.get(Color, color.id).is_active is False

    def test_delete_in_use(self, service: ColorService, make_color, make_category, make_product) -> None:
        category = make_category()
        color = make_color()
        make_product(category, color_id=color.id)

        with pytest.raises(ConflictError, match="Warna tidak dapat dihapus karena masih memiliki 1 produk aktif"):
            service.delete(color.id)

    def test_get_by_id_includes_products(
        self, service: ColorService, make_color, make_category, make_product
    ) -> None:
        category = make_category()
        color = make_color()
        make_product(category, color_id=color.id)

        detail = service.get_by_id(color.id)

        assert [p.code for p in detail.products] == ["DRS1"]

    def test_get_by_id_missing(self, service: ColorService) -> None:
        with pytest.raises(NotFoundError):
            service.get_by_id(uuid4())

    def test_list_search_and_activity(self, service: ColorService, make_color) -> None:
        make_color(name="Merah")
        make_color(name="Merah Muda", hex_code="#FFC0CB")
        make_color(name="Merah Tua", is_active=False)
        make_color(name="Biru", hex_code="#0000FF")

        active = service.list({"search": "merah"})
        inactive = service.list({"isActive": False})

        assert [c.name for c in active.items] == ["Merah", "Merah Muda"]
        assert [c.name for c in inactive.items] == ["Merah Tua"]
