"""Product repository for database access."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from rental_inventory.models.product import Product, ProductStatus
from rental_inventory.schemas.product import ProductCreate, ProductQuery

# Columns that must never be written as NULL from a partial update.
REQUIRED_COLUMNS = {"code", "name", "modal_awal", "harga_sewa", "quantity", "category_id"}
MONEY_COLUMNS = {"modal_awal", "harga_sewa", "material_cost", "total_pendapatan"}


def to_decimal(value: float | int | Decimal | None) -> Decimal | None:
    """Convert a validated number to the Decimal stored in NUMERIC columns."""
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class ProductRepository:
    """Handles database operations for Product entities."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a SQLAlchemy session.

        Args:
            session: Active database session for executing queries
        """
        self._session = session

    def get_by_id(self, product_id: UUID) -> Product | None:
        """Fetch a product by id, active or not."""
        return self._session.get(Product, product_id)

    def get_active(self, product_id: UUID) -> Product | None:
        """Fetch a product by id only if it has not been soft-deleted."""
        return (
            self._session.query(Product)
            .filter(Product.id == product_id, Product.is_active.is_(True))
            .first()
        )

    def list_with_filters(self, query: ProductQuery) -> tuple[Sequence[Product], int]:
        """Fetch products with filtering and pagination.

        Args:
            query: Validated filters, search term and page window

        Returns:
            Tuple of (products on the requested page, total matching count)
        """
        q = self._session.query(Product).filter(Product.is_active.is_(query.is_active))

        if query.category_id is not None:
            q = q.filter(Product.category_id == query.category_id)
        if query.material_id is not None:
            q = q.filter(Product.material_id == query.material_id)
        if query.color_id is not None:
            q = q.filter(Product.color_id == query.color_id)
        if query.status is not None:
            q = q.filter(Product.status == query.status)

        if query.search:
            pattern = f"%{query.search}%"
            q = q.filter(
                or_(
                    Product.name.ilike(pattern),
                    Product.code.ilike(pattern),
                    Product.description.ilike(pattern),
                )
            )

        total = q.count()
        products = (
            q.order_by(Product.created_at.desc())
            .limit(query.limit)
            .offset(query.offset)
            .all()
        )
        return products, total

    def create(
        self,
        data: ProductCreate,
        *,
        created_by: str,
        image_url: str | None = None,
        material_cost: Decimal | None = None,
    ) -> Product:
        """Insert a new product in the AVAILABLE state with zero revenue.

        Raises:
            IntegrityError: If another active product already holds the code
        """
        product = Product(
            code=data.code,
            name=data.name,
            description=data.description,
            size=data.size,
            category_id=data.category_id,
            material_id=data.material_id,
            color_id=data.color_id,
            material_quantity=data.material_quantity,
            material_cost=material_cost,
            modal_awal=to_decimal(data.modal_awal),
            harga_sewa=to_decimal(data.harga_sewa),
            quantity=data.quantity,
            status=ProductStatus.AVAILABLE,
            image_url=image_url,
            total_pendapatan=Decimal("0"),
            is_active=True,
            created_by=created_by,
        )
        self._session.add(product)
        self._session.commit()
        self._session.refresh(product)
        return product

    def update(self, product: Product, changes: dict[str, Any]) -> Product:
        """Apply a partial update. ``None`` is ignored for required columns."""
        for field, value in changes.items():
            if value is None and field in REQUIRED_COLUMNS:
                continue
            if field in MONEY_COLUMNS:
                value = to_decimal(value)
            setattr(product, field, value)

        self._session.commit()
        self._session.refresh(product)
        return product

    def soft_delete(self, product: Product) -> Product:
        """Deactivate the product and park it in MAINTENANCE."""
        product.is_active = False
        product.status = ProductStatus.MAINTENANCE
        self._session.commit()
        self._session.refresh(product)
        return product

    def set_status(self, product: Product, status: ProductStatus) -> Product:
        product.status = status
        self._session.commit()
        self._session.refresh(product)
        return product

    def recalculate_material_cost(self, material_id: UUID, price_per_unit: Decimal) -> int:
        """Refresh ``material_cost`` of active products made from a material.

        Does not commit; callers run it inside their own unit of work.

        Returns:
            Number of products updated
        """
        products = (
            self._session.query(Product)
            .filter(
                Product.material_id == material_id,
                Product.material_quantity.isnot(None),
                Product.is_active.is_(True),
            )
            .all()
        )
        for product in products:
            product.material_cost = price_per_unit * product.material_quantity
        return len(products)
