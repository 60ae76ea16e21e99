"""
Image attachment handling.

Uploads are validated (type, signature, size) before any record is touched.
Accepted images are kept either as files under the uploads directory, referenced
by ``/uploads/<name>``, or inline in the record as a ``data:`` URI. A deployment
uses one mode; only file references are ever released.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import base64
import logging
import os
import re

from api.core.config import Settings
from api.core.errors import ConfigurationError, PayloadTooLarge, StorageError, ValidationError
from api.core.utils import new_id

logger = logging.getLogger(__name__)

UPLOADS_PREFIX = "/uploads/"
ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_TYPES = {"image/jpeg", "image/jpg", "image/pjpeg", "image/png", "image/gif"}
JPEG_MAGIC = b"\xFF\xD8\xFF"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
GIF_MAGICS = (b"GIF87a", b"GIF89a")


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


def _has_valid_signature(data: bytes, content_type: str) -> bool:
    if content_type in {"image/jpeg", "image/jpg", "image/pjpeg"}:
        return data.startswith(JPEG_MAGIC)
    if content_type == "image/png":
        return data.startswith(PNG_MAGIC)
    if content_type == "image/gif":
        return data.startswith(GIF_MAGICS)
    return False


def too_large(max_bytes: int) -> PayloadTooLarge:
    if max_bytes >= 1024 * 1024:
        return PayloadTooLarge(f"Image exceeds the {max_bytes // (1024 * 1024)}MB limit")
    return PayloadTooLarge(f"Image exceeds the {max_bytes} byte limit")


def validate_image(upload: ImageUpload, max_bytes: int) -> None:
    if len(upload.data) > max_bytes:
        raise too_large(max_bytes)
    ext = os.path.splitext(upload.filename or "")[1].lower()
    ct = (upload.content_type or "").lower()
    if ext not in ALLOWED_EXTENSIONS or ct not in ALLOWED_TYPES:
        raise ValidationError("Only image files are allowed!")
    if not upload.data:
        raise ValidationError("Empty image")
    if not _has_valid_signature(upload.data, ct):
        raise ValidationError("Invalid image file")


def safe_filename(filename: str) -> str:
    name = os.path.basename((filename or "").replace("\\", "/"))
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("._")
    return name or "image"


class AssetStorage(ABC):
    mode = "abstract"

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes

    def validate(self, upload: ImageUpload) -> None:
        validate_image(upload, self.max_bytes)

    @abstractmethod
    def store(self, upload: ImageUpload) -> str:
        """Persist the image and return the reference saved on the record."""

    @abstractmethod
    def release(self, reference: Optional[str]) -> None:
        """Drop the asset behind a reference previously returned by store()."""

    def resolve(self, filename: str) -> Optional[Path]:
        return None


class FileAssetStorage(AssetStorage):
    mode = "file"

    def __init__(self, uploads_dir: str | Path, max_bytes: int) -> None:
        super().__init__(max_bytes)
        self.uploads_dir = Path(uploads_dir)
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(f"Cannot create uploads directory {self.uploads_dir}") from exc

    def store(self, upload: ImageUpload) -> str:
        name = f"{new_id()}-{safe_filename(upload.filename)}"
        try:
            (self.uploads_dir / name).write_bytes(upload.data)
        except OSError as exc:
            logger.error("Failed to write upload %s: %s", name, exc)
            raise StorageError("Could not store image") from exc
        return f"{UPLOADS_PREFIX}{name}"

    def release(self, reference: Optional[str]) -> None:
        if not reference or not reference.startswith(UPLOADS_PREFIX):
            return
        path = self.resolve(reference[len(UPLOADS_PREFIX):])
        if path is None:
            return
        try:
            path.unlink()
        except OSError as exc:
            # record already changed; leave the orphan file and keep going
            logger.error("Failed to remove asset %s: %s", path, exc)

    def resolve(self, filename: str) -> Optional[Path]:
        name = os.path.basename(filename or "")
        if not name or name != filename or name.startswith("."):
            return None
        path = self.uploads_dir / name
        return path if path.is_file() else None


class InlineAssetStorage(AssetStorage):
    mode = "inline"

    def store(self, upload: ImageUpload) -> str:
        encoded = base64.b64encode(upload.data).decode("ascii")
        return f"data:{(upload.content_type or '').lower()};base64,{encoded}"

    def release(self, reference: Optional[str]) -> None:
        return None


def build_asset_storage(settings: Settings) -> AssetStorage:
    if settings.asset_mode == "inline":
        return InlineAssetStorage(settings.max_upload_bytes)
    if settings.asset_mode == "file":
        return FileAssetStorage(settings.uploads_dir, settings.max_upload_bytes)
    raise ConfigurationError(f"Unknown ASSET_MODE '{settings.asset_mode}' (expected 'file' or 'inline')")
