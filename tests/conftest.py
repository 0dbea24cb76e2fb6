"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import itertools
import os
from decimal import Decimal
from typing import Callable, Generator, Sequence

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from rental_inventory.core.config import Settings
from rental_inventory.core.db import create_db_engine, create_session_factory
from rental_inventory.models import Base, Category, Color, Material, Product, ProductStatus
from rental_inventory.schemas.media import ImageFile
from rental_inventory.services.media_service import MediaService

# In-memory SQLite by default; point at PostgreSQL to match production.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")

ACTOR_ID = "user-123"
STORAGE_BASE_URL = "https://storage.test"


class FakeStorage:
    """In-memory bucket with switchable failures."""

    def __init__(self, bucket: str = "products") -> None:
        self.bucket = bucket
        self.objects: dict[str, bytes] = {}
        self.removed: list[str] = []
        self.upload_calls = 0
        # Raised one per upload attempt, in order, before falling back to upload_error.
        self.upload_failures: list[Exception] = []
        self.upload_error: Exception | None = None
        self.remove_error: Exception | None = None

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        self.upload_calls += 1
        if self.upload_failures:
            raise self.upload_failures.pop(0)
        if self.upload_error is not None:
            raise self.upload_error
        self.objects[path] = data

    def remove(self, paths: Sequence[str]) -> None:
        if self.remove_error is not None:
            raise self.remove_error
        for path in paths:
            self.objects.pop(path, None)
            self.removed.append(path)

    def get_public_url(self, path: str) -> str:
        return f"{STORAGE_BASE_URL}/storage/v1/object/public/{self.bucket}/{path}"


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Create a fresh schema for each test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_db_engine(TEST_DATABASE_URL)
        Base.metadata.drop_all(engine)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine):
    return create_session_factory(db_engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Provide a database session for testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url=TEST_DATABASE_URL,
        storage_url=STORAGE_BASE_URL,
        upload_max_attempts=3,
        upload_retry_delay_seconds=1.0,
    )


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def sleeps() -> list[float]:
    """Records every backoff wait instead of sleeping."""
    return []


@pytest.fixture
def media_service(storage: FakeStorage, settings: Settings, sleeps: list[float]) -> MediaService:
    ticks = itertools.count(1_700_000_000)
    return MediaService(
        storage,
        ACTOR_ID,
        settings=settings,
        sleep=sleeps.append,
        clock=lambda: float(next(ticks)),
    )


@pytest.fixture
def png_image() -> ImageFile:
    return ImageFile(filename="dress.png", content_type="image/png", data=b"\x89PNG\r\n\x1a\n" + b"0" * 256)


@pytest.fixture
def make_category(db_session: Session) -> Callable[..., Category]:
    def _make(name: str = "Dress", color: str = "#FF5733") -> Category:
        category = Category(name=name, color=color, created_by=ACTOR_ID)
        db_session.add(category)
        db_session.commit()
        return category

    return _make


@pytest.fixture
def make_material(db_session: Session) -> Callable[..., Material]:
    def _make(
        name: str = "Kain Katun",
        price_per_unit: Decimal = Decimal("100000"),
        unit: str = "meter",
        is_active: bool = True,
    ) -> Material:
        material = Material(
            name=name, price_per_unit=price_per_unit, unit=unit, is_active=is_active, created_by=ACTOR_ID
        )
        db_session.add(material)
        db_session.commit()
        return material

    return _make


@pytest.fixture
def make_color(db_session: Session) -> Callable[..., Color]:
    def _make(name: str = "Merah", hex_code: str | None = "#FF0000", is_active: bool = True) -> Color:
        color = Color(name=name, hex_code=hex_code, is_active=is_active, created_by=ACTOR_ID)
        db_session.add(color)
        db_session.commit()
        return color

    return _make


@pytest.fixture
def make_product(db_session: Session) -> Callable[..., Product]:
    def _make(category: Category, code: str = "DRS1", **overrides) -> Product:
        values = {
            "name": "Dress Merah",
            "modal_awal": Decimal("150000"),
            "harga_sewa": Decimal("50000"),
            "quantity": 5,
            "status": ProductStatus.AVAILABLE,
            "is_active": True,
            "created_by": ACTOR_ID,
        }
        values.update(overrides)
        product = Product(code=code, category_id=category.id, **values)
        db_session.add(product)
        db_session.commit()
        return product

    return _make
