"""Product model definition."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .category import Category
    from .color import Color
    from .material import Material


class ProductStatus(str, Enum):
    """Rental availability of a product."""

    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"


class Product(Base):
    """A rentable clothing item."""

    __tablename__ = "products"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    code: Mapped[str] = mapped_column(String(4), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    size: Mapped[str | None] = mapped_column(String(20), nullable=True)

    category_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("categories.id"), nullable=False)
    material_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("materials.id"), nullable=True)
    color_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("colors.id"), nullable=True)
    material_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    material_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    modal_awal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    harga_sewa: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    status: Mapped[ProductStatus] = mapped_column(
        SAEnum(ProductStatus, name="product_status", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ProductStatus.AVAILABLE,
        server_default=ProductStatus.AVAILABLE.value,
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_pendapatan: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0"), server_default="0"
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)

    category: Mapped[Category] = relationship(back_populates="products")
    material: Mapped[Material | None] = relationship()
    color: Mapped[Color | None] = relationship()

    # Only one active product may hold a code; soft-deleted rows keep theirs.
    __table_args__ = (
        Index(
            "uq_products_code_active",
            code,
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
        Index("ix_products_category_id", category_id),
    )
