"""Product lifecycle: create, update, soft delete, status changes and listing."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from rental_inventory.core.errors import ConflictError, DatabaseError, NotFoundError, StorageError
from rental_inventory.core.logging import ServiceLogger
from rental_inventory.models.material import Material
from rental_inventory.models.product import ProductStatus
from rental_inventory.schemas.common import Page
from rental_inventory.schemas.media import ImageFile, UploadResult
from rental_inventory.schemas.product import (
    ProductCreate,
    ProductQuery,
    ProductResponse,
    ProductStatusUpdate,
    ProductUpdate,
)

from .base import EntityService
from .category_repository import CategoryRepository
from .color_repository import ColorRepository
from .guards import EntityKind
from .material_repository import MaterialRepository
from .media_service import MediaService
from .product_repository import ProductRepository, to_decimal
from .validation import validate_payload

Payload = Mapping[str, Any] | BaseModel


def material_cost_for(material: Material | None, material_quantity: int | None) -> Decimal | None:
    """``price_per_unit * material_quantity`` when both are known."""
    if material is None or material_quantity is None:
        return None
    return (to_decimal(material.price_per_unit) * material_quantity).quantize(Decimal("0.01"))


class ProductService(EntityService):
    """Orchestrates validation, guards, image upload and persistence for products."""

    def __init__(
        self,
        session: Session,
        actor_id: str,
        media: MediaService,
        *,
        logger: ServiceLogger | None = None,
    ) -> None:
        super().__init__(session, actor_id, logger=logger)
        self._media = media
        self._products = ProductRepository(session)
        self._categories = CategoryRepository(session)
        self._materials = MaterialRepository(session)
        self._colors = ColorRepository(session)

    def create(self, data: Payload, image: ImageFile | None = None) -> ProductResponse:
        """Create a product, uploading its image before the row is written.

        Raises:
            ValidationError: Bad payload or image (before any database call)
            ConflictError: Code already used by an active product
            NotFoundError: Category, material or color does not exist
            UploadError: Image upload failed; no product is written
            DatabaseError: Unexpected persistence failure
        """
        payload = validate_payload(ProductCreate, data)
        self._media.validate_file(image)

        conflict = ConflictError.unique_constraint(
            "code", payload.code, f"Kode produk {payload.code} sudah digunakan"
        )
        upload: UploadResult | None = None
        try:
            with self._database("menyimpan produk", conflict):
                self._unique.ensure_unique(EntityKind.PRODUCT, payload.code)
                self._require_category(payload.category_id)
                material = self._require_material(payload.material_id)
                self._require_color(payload.color_id)

                upload = self._media.upload(image, payload.code)
                product = self._products.create(
                    payload,
                    created_by=self._actor_id,
                    image_url=upload.url if upload else None,
                    material_cost=material_cost_for(material, payload.material_quantity),
                )
        except (ConflictError, DatabaseError):
            self._discard_upload(upload)
            raise

        self._logger.info(
            "product.created",
            f"Product {product.code} created",
            {"product_id": product.id, "actor_id": self._actor_id, "has_image": upload is not None},
        )
        return ProductResponse.model_validate(product)

    def update(self, product_id: UUID | str, patch: Payload, image: ImageFile | None = None) -> ProductResponse:
        """Apply a partial update, replacing the image if a new one is given.

        The new image is uploaded first. Fields and ``image_url`` are only
        written after the upload succeeds, and the previous image is removed
        afterwards on a best-effort basis.
        """
        product_id = self._parse_id(product_id)
        with self._database("memuat produk"):
            product = self._products.get_active(product_id)
        if product is None:
            raise NotFoundError("Produk tidak ditemukan", {"type": "Product", "id": str(product_id)})

        changes = validate_payload(ProductUpdate, patch).model_dump(exclude_unset=True)
        self._media.validate_file(image)

        new_code = changes.get("code")
        conflict = ConflictError.unique_constraint(
            "code", new_code or product.code, f"Kode produk {new_code or product.code} sudah digunakan"
        )
        previous_image_url = product.image_url
        upload: UploadResult | None = None
        try:
            with self._database("memperbarui produk", conflict):
                if new_code is not None and new_code != product.code:
                    self._unique.ensure_unique(EntityKind.PRODUCT, new_code, exclude_id=product.id)

                if changes.get("category_id") is not None and changes["category_id"] != product.category_id:
                    self._require_category(changes["category_id"])
                if changes.get("color_id") is not None and changes["color_id"] != product.color_id:
                    self._require_color(changes["color_id"])

                if "material_id" in changes or "material_quantity" in changes:
                    material_id = changes.get("material_id", product.material_id)
                    if material_id != product.material_id:
                        material = self._require_material(material_id)
                    else:
                        # Already linked; keep pricing from it even if since deactivated.
                        material = self._materials.get_by_id(material_id) if material_id else None
                    quantity = changes.get("material_quantity", product.material_quantity)
                    changes["material_cost"] = material_cost_for(material, quantity)

                upload = self._media.upload(image, changes.get("code") or product.code)
                if upload is not None:
                    changes["image_url"] = upload.url

                product = self._products.update(product, changes)
        except (ConflictError, DatabaseError):
            self._discard_upload(upload)
            raise

        if upload is not None and previous_image_url:
            self._media.cleanup(previous_image_url)

        self._logger.info(
            "product.updated",
            f"Product {product.code} updated",
            {"product_id": product.id, "fields": sorted(changes), "actor_id": self._actor_id},
        )
        return ProductResponse.model_validate(product)

    def delete(self, product_id: UUID | str) -> bool:
        """Soft delete an active product and park it in MAINTENANCE.

        Raises:
            NotFoundError: If the product is absent or already inactive
        """
        product_id = self._parse_id(product_id)
        with self._database("menghapus produk"):
            product = self._products.get_active(product_id)
            if product is None:
                raise NotFoundError("Produk tidak ditemukan", {"type": "Product", "id": str(product_id)})
            product = self._products.soft_delete(product)

        image_url = product.image_url
        if image_url and self._media.cleanup(image_url):
            with self._database("menghapus referensi gambar produk"):
                self._products.update(product, {"image_url": None})

        self._logger.info(
            "product.deleted",
            f"Product {product.code} deactivated",
            {"product_id": product.id, "actor_id": self._actor_id},
        )
        return True

    def get_by_id(self, product_id: UUID | str) -> ProductResponse:
        """Return a product with its category, material and color expanded.

        Inactive products are returned too so they stay auditable.
        """
        product_id = self._parse_id(product_id)
        with self._database("memuat produk"):
            product = self._products.get_by_id(product_id)
            if product is None:
                raise NotFoundError("Produk tidak ditemukan", {"type": "Product", "id": str(product_id)})
            return ProductResponse.model_validate(product)

    def list(self, query: Payload | None = None) -> Page[ProductResponse]:
        params = validate_payload(ProductQuery, query or {})
        with self._database("memuat daftar produk"):
            products, total = self._products.list_with_filters(params)
            items = [ProductResponse.model_validate(p) for p in products]
        return Page[ProductResponse].build(items, page=params.page, limit=params.limit, total=total)

    def update_status(self, product_id: UUID | str, status: ProductStatus | str) -> ProductResponse:
        """Move a product to any of AVAILABLE, RENTED or MAINTENANCE.

        Every transition is allowed, including to the current status.
        """
        product_id = self._parse_id(product_id)
        new_status = validate_payload(ProductStatusUpdate, {"status": status}).status
        with self._database("memperbarui status produk"):
            product = self._products.get_active(product_id)
            if product is None:
                raise NotFoundError("Produk tidak ditemukan", {"type": "Product", "id": str(product_id)})
            previous = product.status
            product = self._products.set_status(product, new_status)

        self._logger.info(
            "product.status_changed",
            f"Product {product.code} status {previous.value} -> {new_status.value}",
            {"product_id": product.id, "actor_id": self._actor_id},
        )
        return ProductResponse.model_validate(product)

    def _require_category(self, category_id: UUID) -> None:
        if self._categories.get_by_id(category_id) is None:
            raise NotFoundError("Kategori tidak ditemukan", {"type": "Category", "id": str(category_id)})

    def _require_material(self, material_id: UUID | None) -> Material | None:
        if material_id is None:
            return None
        material = self._materials.get_active(material_id)
        if material is None:
            raise NotFoundError("Material tidak ditemukan", {"type": "Material", "id": str(material_id)})
        return material

    def _require_color(self, color_id: UUID | None) -> None:
        if color_id is not None and self._colors.get_active(color_id) is None:
            raise NotFoundError("Warna tidak ditemukan", {"type": "Color", "id": str(color_id)})

    def _discard_upload(self, upload: UploadResult | None) -> None:
        """Remove an image whose product row never got written."""
        if upload is None:
            return
        try:
            self._media.delete(upload.path)
        except StorageError as e:
            self._logger.warn("media.orphan", f"Could not remove orphaned upload: {e}", {"path": upload.path})
