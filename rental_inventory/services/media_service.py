"""Product image upload, replacement and cleanup against object storage."""
from __future__ import annotations

import time
from typing import Callable
from urllib.parse import unquote, urlparse

from rental_inventory.core.config import Settings, get_settings
from rental_inventory.core.errors import StorageError, UploadError, ValidationError
from rental_inventory.core.logging import ServiceLogger, get_service_logger
from rental_inventory.core.storage import ObjectStorage
from rental_inventory.schemas.media import ImageFile, UploadResult

IMAGE_TYPE_LABELS = {"image/jpeg": "JPEG", "image/png": "PNG", "image/webp": "WebP"}


class MediaService:
    """Uploads product images with bounded retry and removes superseded ones.

    An upload attempt goes Validating -> Uploading -> Succeeded, or waits
    ``attempt * upload_retry_delay_seconds`` and tries again until
    ``upload_max_attempts`` is spent, then fails with ``UploadError``.
    The backoff is linear. Waits block the calling request.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        owner_scope: str,
        *,
        settings: Settings | None = None,
        logger: ServiceLogger | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._owner_scope = owner_scope
        self._settings = settings or get_settings()
        self._logger = logger or get_service_logger(__name__)
        self._sleep = sleep
        self._clock = clock

    @property
    def bucket(self) -> str:
        return self._storage.bucket

    def validate_file(self, file: ImageFile | None) -> bool:
        """Check size and type. ``None`` means "no file" and is valid.

        Raises:
            ValidationError: If the file is empty, too large or not an image
        """
        if file is None:
            return True

        errors: list[dict[str, str]] = []
        if file.size == 0:
            errors.append({"field": "image", "message": "File gambar tidak boleh kosong"})
        elif file.size > self._settings.max_image_size_bytes:
            errors.append(
                {"field": "image", "message": f"Ukuran file maksimal {self._settings.max_image_size_mb}MB"}
            )
        if file.content_type not in self._settings.allowed_image_types:
            labels = ", ".join(
                IMAGE_TYPE_LABELS.get(kind, kind) for kind in self._settings.allowed_image_types
            )
            errors.append({"field": "image", "message": f"Format file harus {labels}"})

        if errors:
            raise ValidationError("File gambar tidak valid", errors)
        return True

    def generate_path(self, entity_code: str, extension: str) -> str:
        timestamp = int(self._clock() * 1000)
        return f"products/{self._owner_scope}/{entity_code}/{timestamp}.{extension}"

    def upload(self, file: ImageFile | None, entity_code: str) -> UploadResult | None:
        """Upload an image, retrying failed storage writes.

        Returns:
            UploadResult with public URL and storage path, or None if no file

        Raises:
            ValidationError: If the file fails validation (never retried)
            UploadError: If every attempt failed
        """
        self.validate_file(file)
        if file is None:
            return None

        path = self.generate_path(entity_code, file.extension)
        max_attempts = self._settings.upload_max_attempts
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            try:
                self._storage.upload(path, file.data, file.content_type)
            except Exception as e:
                last_error = e
                self._logger.warn(
                    "media.upload_failed",
                    f"Upload attempt {attempt}/{max_attempts} failed: {e}",
                    {"path": path, "attempt": attempt},
                )
                if attempt < max_attempts:
                    self._sleep(attempt * self._settings.upload_retry_delay_seconds)
                continue

            url = self._storage.get_public_url(path)
            self._logger.info("media.uploaded", "Image uploaded", {"path": path, "attempt": attempt})
            return UploadResult(url=url, path=path)

        raise UploadError(
            f"Gagal mengupload file setelah {max_attempts} percobaan: {last_error}",
            {"path": path, "attempts": max_attempts},
        )

    def delete(self, path: str | None) -> bool:
        """Remove one object. Empty path returns False.

        Raises:
            StorageError: If the storage layer rejects the removal
        """
        if not path or not path.strip():
            return False

        try:
            self._storage.remove([path])
        except StorageError as e:
            raise StorageError(f"Gagal menghapus gambar: {e.message}", {"path": path}) from e
        except Exception as e:
            raise StorageError(f"Gagal menghapus gambar: {e}", {"path": path}) from e

        self._logger.info("media.deleted", "Image removed", {"path": path})
        return True

    def extract_path_from_url(self, url: str | None) -> str:
        """Return the object path that follows the bucket segment of a public URL.

        Raises:
            ValueError: If the URL is empty, malformed or outside the bucket
        """
        if not url or not url.strip():
            raise ValueError("Invalid image URL")

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Invalid image URL")

        parts = parsed.path.split("/")
        try:
            bucket_index = parts.index(self.bucket)
        except ValueError:
            raise ValueError("Invalid image URL") from None

        path = unquote("/".join(parts[bucket_index + 1 :]))
        if not path:
            raise ValueError("Invalid image URL")
        return path

    def update(self, file: ImageFile | None, entity_code: str, old_path: str | None = None) -> UploadResult | None:
        """Remove the old image (best-effort) and upload the new one."""
        if old_path:
            try:
                self.delete(old_path)
            except StorageError as e:
                self._logger.warn("media.cleanup_failed", f"Failed to delete old image: {e.message}", {"path": old_path})

        return self.upload(file, entity_code)

    def cleanup(self, url: str | None) -> bool:
        """Best-effort removal of the object behind a public URL. Never raises."""
        if not url:
            return False

        try:
            return self.delete(self.extract_path_from_url(url))
        except (ValueError, StorageError) as e:
            self._logger.warn("media.cleanup_failed", f"Image cleanup skipped: {e}", {"url": url})
            return False
