"""Tests for MediaService."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from rental_inventory.core.config import Settings
from rental_inventory.core.errors import StorageError, UploadError, ValidationError
from rental_inventory.core.logging import ServiceLogger
from rental_inventory.schemas.media import ImageFile
from rental_inventory.services.media_service import MediaService

from .conftest import ACTOR_ID, STORAGE_BASE_URL, FakeStorage


class TestValidateFile:
    def test_no_file_is_valid(self, media_service: MediaService) -> None:
        assert media_service.validate_file(None) is True

    def test_accepts_supported_image(self, media_service: MediaService, png_image: ImageFile) -> None:
        assert media_service.validate_file(png_image) is True

    def test_rejects_oversized_file(self, media_service: MediaService) -> None:
        big = ImageFile("big.jpg", "image/jpeg", b"0" * (5 * 1024 * 1024 + 1))

        with pytest.raises(ValidationError) as exc_info:
            media_service.validate_file(big)

        assert exc_info.value.details == [{"field": "image", "message": "Ukuran file maksimal 5MB"}]

    def test_rejects_unsupported_type(self, media_service: MediaService) -> None:
        gif = ImageFile("anim.gif", "image/gif", b"GIF89a")

        with pytest.raises(ValidationError) as exc_info:
            media_service.validate_file(gif)

        assert exc_info.value.details[0]["message"] == "Format file harus JPEG, PNG, WebP"

    def test_rejects_empty_file(self, media_service: MediaService) -> None:
        with pytest.raises(ValidationError):
            media_service.validate_file(ImageFile("empty.png", "image/png", b""))


class TestUpload:
    def test_upload_returns_public_url(
        self, media_service: MediaService, storage: FakeStorage, png_image: ImageFile
    ) -> None:
        result = media_service.upload(png_image, "DRS1")

        assert result is not None
        assert result.path == f"products/{ACTOR_ID}/DRS1/1700000000000.png"
        assert result.url == f"{STORAGE_BASE_URL}/storage/v1/object/public/products/{result.path}"
        assert storage.objects[result.path] == png_image.data

    def test_no_file_uploads_nothing(self, media_service: MediaService, storage: FakeStorage) -> None:
        assert media_service.upload(None, "DRS1") is None
        assert storage.upload_calls == 0

    def test_retries_then_succeeds(
        self, media_service: MediaService, storage: FakeStorage, png_image: ImageFile, sleeps: list[float]
    ) -> None:
        storage.upload_failures = [StorageError("timeout"), StorageError("timeout")]

        result = media_service.upload(png_image, "DRS1")

        assert result is not None
        assert storage.upload_calls == 3
        assert sleeps == [1.0, 2.0]

    def test_gives_up_after_three_attempts(
        self, media_service: MediaService, storage: FakeStorage, png_image: ImageFile, sleeps: list[float]
    ) -> None:
        storage.upload_error = Exception("Network error")

        with pytest.raises(UploadError) as exc_info:
            media_service.upload(png_image, "DRS1")

        assert exc_info.value.message == "Gagal mengupload file setelah 3 percobaan: Network error"
        assert exc_info.value.details["attempts"] == 3
        assert storage.upload_calls == 3
        assert sleeps == [1.0, 2.0]
        assert storage.objects == {}

    def test_invalid_file_is_never_retried(
        self, media_service: MediaService, storage: FakeStorage, sleeps: list[float]
    ) -> None:
        with pytest.raises(ValidationError):
            media_service.upload(ImageFile("a.bmp", "image/bmp", b"BM"), "DRS1")

        assert storage.upload_calls == 0
        assert sleeps == []

    def test_attempts_follow_settings(self, storage: FakeStorage, png_image: ImageFile) -> None:
        settings = Settings(database_url="sqlite://", upload_max_attempts=5, upload_retry_delay_seconds=0.5)
        sleeps: list[float] = []
        logger = MagicMock(spec=ServiceLogger)
        service = MediaService(storage, ACTOR_ID, settings=settings, logger=logger, sleep=sleeps.append)
        storage.upload_error = StorageError("bucket unavailable")

        with pytest.raises(UploadError):
            service.upload(png_image, "DRS1")

        assert sleeps == [0.5, 1.0, 1.5, 2.0]
        assert logger.warn.call_count == 5
        assert logger.warn.call_args.args[0] == "media.upload_failed"


class TestDeleteAndCleanup:
    def test_delete_empty_path(self, media_service: MediaService) -> None:
        assert media_service.delete("") is False
        assert media_service.delete(None) is False

    def test_delete_removes_object(self, media_service: MediaService, storage: FakeStorage) -> None:
        storage.objects["products/x.png"] = b"x"

        assert media_service.delete("products/x.png") is True
        assert storage.objects == {}

    def test_delete_wraps_storage_failure(self, media_service: MediaService, storage: FakeStorage) -> None:
        storage.remove_error = StorageError("Object not found")

        with pytest.raises(StorageError, match="Gagal menghapus gambar: Object not found"):
            media_service.delete("products/x.png")

    def test_extract_path_from_url(self, media_service: MediaService) -> None:
        url = f"{STORAGE_BASE_URL}/storage/v1/object/public/products/products/{ACTOR_ID}/DRS1/1.png"

        assert media_service.extract_path_from_url(url) == f"products/{ACTOR_ID}/DRS1/1.png"

    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "https://cdn.example.com/other-bucket/file.png", f"{STORAGE_BASE_URL}/products/"],
    )
    def test_extract_path_rejects_bad_urls(self, media_service: MediaService, url: str) -> None:
        with pytest.raises(ValueError, match="Invalid image URL"):
            media_service.extract_path_from_url(url)

    def test_cleanup_never_raises(self, media_service: MediaService, storage: FakeStorage) -> None:
        storage.remove_error = StorageError("Storage unavailable")
        url = f"{STORAGE_BASE_URL}/storage/v1/object/public/products/products/a.png"

        assert media_service.cleanup(url) is False
        assert media_service.cleanup("garbage") is False
        assert media_service.cleanup(None) is False

    def test_update_replaces_image(
        self, media_service: MediaService, storage: FakeStorage, png_image: ImageFile
    ) -> None:
        first = media_service.upload(png_image, "DRS1")

        second = media_service.update(png_image, "DRS1", first.path)

        assert second.path != first.path
        assert list(storage.objects) == [second.path]

    def test_update_tolerates_failed_removal(
        self, media_service: MediaService, storage: FakeStorage, png_image: ImageFile
    ) -> None:
        storage.remove_error = StorageError("Object not found")

        result = media_service.update(png_image, "DRS1", "products/missing.png")

        assert result is not None
        assert result.path in storage.objects
