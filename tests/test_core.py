"""Tests for settings, errors, logging and session helpers."""
from __future__ import annotations

import logging

import pytest

from rental_inventory.core.config import Settings
from rental_inventory.core.errors import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ServiceError,
    StorageError,
    UploadError,
    ValidationError,
)
from rental_inventory.core.db import session_scope
from rental_inventory.core.logging import ServiceLogger, get_service_logger
from rental_inventory.models import Category


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(database_url="sqlite://")

        assert settings.upload_max_attempts == 3
        assert settings.upload_retry_delay_seconds == 1.0
        assert settings.max_image_size_bytes == 5 * 1024 * 1024
        assert settings.storage_bucket == "products"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@db:5432/rental")
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")

        settings = Settings()

        assert settings.database_url == "postgresql://u:p@db:5432/rental"
        assert settings.storage_url == "https://abc.supabase.co"


class TestErrors:
    @pytest.mark.parametrize(
        "error, code, status",
        [
            (ValidationError(), "VALIDATION_ERROR", 400),
            (NotFoundError(), "NOT_FOUND", 404),
            (ConflictError(), "CONFLICT", 409),
            (UploadError("Gagal mengupload file"), "UPLOAD_ERROR", 400),
            (StorageError("down"), "STORAGE_ERROR", 502),
            (DatabaseError(), "DATABASE_ERROR", 500),
        ],
    )
    def test_codes(self, error: ServiceError, code: str, status: int) -> None:
        assert error.code == code
        assert error.status_code == status
        assert isinstance(error, ServiceError)

    def test_to_dict(self) -> None:
        error = ValidationError("Validasi gagal", [{"field": "code", "message": "Kode produk wajib diisi"}])

        assert error.to_dict() == {
            "error": {
                "message": "Validasi gagal",
                "code": "VALIDATION_ERROR",
                "details": [{"field": "code", "message": "Kode produk wajib diisi"}],
            }
        }

    def test_to_dict_without_details(self) -> None:
        assert NotFoundError("Produk tidak ditemukan").to_dict() == {
            "error": {"message": "Produk tidak ditemukan", "code": "NOT_FOUND"}
        }

    def test_unique_constraint(self) -> None:
        error = ConflictError.unique_constraint("name", "Dress")

        assert error.message == 'Nilai name "Dress" sudah digunakan'
        assert error.details == {"field": "name", "value": "Dress"}


class TestServiceLogger:
    def test_renders_event_and_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_service_logger("rental_inventory.tests")

        with caplog.at_level(logging.INFO, logger="rental_inventory.tests"):
            logger.info("product.created", "Product DRS1 created", {"product_id": "p-1"})

        (record,) = caplog.records
        assert record.getMessage() == "[product.created] Product DRS1 created (product_id=p-1)"
        assert record.event == "product.created"
        assert record.context == {"product_id": "p-1"}

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = ServiceLogger(logging.getLogger("rental_inventory.levels"))

        with caplog.at_level(logging.INFO, logger="rental_inventory.levels"):
            logger.warn("media.upload_failed", "retrying")
            logger.error("db.error", "failed")

        assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.ERROR]


class TestSessionScope:
    def test_commits_on_success(self, session_factory) -> None:
        with session_scope(session_factory) as session:
            session.add(Category(name="Dress", color="#FF5733", created_by="user-123"))

        with session_scope(session_factory) as session:
            assert session.query(Category).count() == 1

    def test_rolls_back_on_error(self, session_factory) -> None:
        with pytest.raises(RuntimeError):
            with session_scope(session_factory) as session:
                session.add(Category(name="Dress", color="#FF5733", created_by="user-123"))
                session.flush()
                raise RuntimeError("boom")

        with session_scope(session_factory) as session:
            assert session.query(Category).count() == 0
