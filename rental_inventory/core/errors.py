"""Typed error taxonomy shared by the service layer.

Every failure a caller has to handle is one of the classes below. Route code
maps them to responses through ``status_code`` / ``to_dict``; services never
raise bare ``Exception`` for a client-correctable condition.
"""
from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for errors surfaced by the service layer."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Render the error in the shape returned to API callers."""
        body: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


class ValidationError(ServiceError):
    """Payload has the wrong shape or an out-of-range value."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str = "Validasi gagal", details: Any = None) -> None:
        super().__init__(message, details)

    @property
    def fields(self) -> list[str]:
        """Names of every field reported as invalid."""
        if not isinstance(self.details, list):
            return []
        return [item["field"] for item in self.details if "field" in item]


class NotFoundError(ServiceError):
    """Referenced entity does not exist or is inactive."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Resource tidak ditemukan", details: Any = None) -> None:
        super().__init__(message, details)


class ConflictError(ServiceError):
    """Uniqueness or dependency rule blocks the request."""

    code = "CONFLICT"
    status_code = 409

    def __init__(self, message: str = "Resource conflict", details: Any = None) -> None:
        super().__init__(message, details)

    @classmethod
    def unique_constraint(cls, field: str, value: str, message: str | None = None) -> ConflictError:
        return cls(message or f'Nilai {field} "{value}" sudah digunakan', {"field": field, "value": value})


class UploadError(ServiceError):
    """Object storage write failed after the retry budget was spent."""

    code = "UPLOAD_ERROR"
    status_code = 400


class StorageError(ServiceError):
    """Single object storage call failed (upload, remove)."""

    code = "STORAGE_ERROR"
    status_code = 502


class DatabaseError(ServiceError):
    """Unexpected persistence failure. Never retried by the service layer."""

    code = "DATABASE_ERROR"
    status_code = 500

    def __init__(self, message: str = "Terjadi kesalahan pada database", details: Any = None) -> None:
        super().__init__(message, details)


__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UploadError",
    "StorageError",
    "DatabaseError",
]
