"""Object storage client for product images."""
from __future__ import annotations

import logging
from typing import Protocol, Sequence
from urllib.parse import quote

import httpx

from .config import Settings, get_settings
from .errors import StorageError

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_LENGTH = 300


class ObjectStorage(Protocol):
    """Minimal bucket operations the media layer depends on."""

    bucket: str

    def upload(self, path: str, data: bytes, content_type: str) -> None: ...

    def remove(self, paths: Sequence[str]) -> None: ...

    def get_public_url(self, path: str) -> str: ...


class SupabaseStorage:
    """Supabase Storage REST client for a single bucket.

    Every failed call (transport error or non-2xx response) is raised as
    ``StorageError`` carrying the message reported by the storage API.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.bucket = bucket
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}", "apikey": api_key},
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SupabaseStorage:
        settings = settings or get_settings()
        return cls(
            settings.storage_url,
            settings.storage_key,
            settings.storage_bucket,
            timeout=settings.storage_timeout_seconds,
        )

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        url = f"{self._base_url}/storage/v1/object/{self.bucket}/{quote(path)}"
        self._send(
            "POST",
            url,
            content=data,
            headers={"Content-Type": content_type, "cache-control": "3600", "x-upsert": "true"},
        )
        logger.debug(f"Uploaded {len(data)} bytes to {self.bucket}/{path}")

    def remove(self, paths: Sequence[str]) -> None:
        url = f"{self._base_url}/storage/v1/object/{self.bucket}"
        self._send("DELETE", url, json={"prefixes": list(paths)})
        logger.debug(f"Removed {len(paths)} object(s) from {self.bucket}")

    def get_public_url(self, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise StorageError(f"Storage request timed out: {e}") from e
        except httpx.RequestError as e:
            raise StorageError(f"Storage request failed: {e}") from e

        if response.is_success:
            return response

        raise StorageError(self._error_message(response), {"status_code": response.status_code})

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:MAX_ERROR_BODY_LENGTH] or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or body)[:MAX_ERROR_BODY_LENGTH]
        return str(body)[:MAX_ERROR_BODY_LENGTH]
