"""Schemas for image files travelling through the media protocol."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass(frozen=True)
class ImageFile:
    """An uploaded image as received from the caller."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        suffix = PurePosixPath(self.filename).suffix.lstrip(".").lower()
        return suffix or self.content_type.rsplit("/", 1)[-1].lower()


@dataclass(frozen=True)
class UploadResult:
    """Where an uploaded image ended up."""

    url: str
    path: str
