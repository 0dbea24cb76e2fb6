"""Core application utilities and infrastructure."""
from .config import Settings, get_settings
from .errors import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ServiceError,
    StorageError,
    UploadError,
    ValidationError,
)
from .logging import ServiceLogger, configure_logging, get_service_logger
from .storage import ObjectStorage, SupabaseStorage

__all__ = [
    "Settings",
    "get_settings",
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UploadError",
    "StorageError",
    "DatabaseError",
    "ServiceLogger",
    "configure_logging",
    "get_service_logger",
    "ObjectStorage",
    "SupabaseStorage",
]
