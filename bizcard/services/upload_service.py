"""Avatar upload: validate, normalize with Pillow, store and resolve the URL."""

from __future__ import annotations

import io
import logging
import re
import time
from typing import Callable, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from bizcard.core.config import get_settings
from bizcard.repositories.blob_storage import BlobStorage, LocalBlobStorage
from bizcard.services.errors import UploadFailure

logger = logging.getLogger(__name__)

JPEG_MAGIC = b"\xFF\xD8\xFF"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
AVATAR_MAX_SIZE = (800, 800)
AVATAR_MAX_PIXELS = 40_000_000

_CONTENT_TYPES = {
    "image/jpeg": ("JPEG", "jpg"),
    "image/jpg": ("JPEG", "jpg"),
    "image/pjpeg": ("JPEG", "jpg"),
    "image/png": ("PNG", "png"),
}
_EXT_RE = re.compile(r"[A-Za-z0-9]{1,8}")


def _has_valid_signature(data: bytes, image_format: str) -> bool:
    if image_format == "JPEG":
        return data.startswith(JPEG_MAGIC)
    if image_format == "PNG":
        return data.startswith(PNG_MAGIC)
    return False


def _file_extension(filename: str, fallback: str) -> str:
    _, dot, ext = (filename or "").rpartition(".")
    ext = ext.strip().lower()
    if dot and _EXT_RE.fullmatch(ext):
        return ext
    return fallback


def _normalize_image(data: bytes, image_format: str, max_size: tuple[int, int]) -> bytes:
    try:
        image = Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise UploadFailure("Invalid image file.") from exc
    width, height = image.size
    if width * height > AVATAR_MAX_PIXELS:
        raise UploadFailure("Image dimensions are too large.")
    try:
        image.load()
    except OSError as exc:
        raise UploadFailure("Invalid image file.") from exc
    image = ImageOps.exif_transpose(image)
    if image_format == "JPEG":
        image = image.convert("RGB")
    image.thumbnail(max_size, Image.LANCZOS)
    buffer = io.BytesIO()
    if image_format == "JPEG":
        image.save(buffer, format="JPEG", quality=85, optimize=True)
    else:
        image.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


class AvatarUploader:
    """Stores avatar images under `avatars/{user_id}-{timestamp}.{ext}`."""

    def __init__(
        self,
        storage: BlobStorage | None = None,
        *,
        bucket: str | None = None,
        max_bytes: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        settings = get_settings()
        self.storage = storage or LocalBlobStorage()
        self.bucket = bucket or settings.avatars_bucket
        self.max_bytes = max_bytes or settings.max_upload_bytes
        self._clock = clock

    def storage_path(self, user_id: str, filename: str, fallback_ext: str = "jpg") -> str:
        timestamp = int(self._clock() * 1000)
        ext = _file_extension(filename, fallback_ext)
        return f"avatars/{user_id}-{timestamp}.{ext}"

    def upload(self, user_id: str, filename: str, content_type: Optional[str], data: bytes) -> str:
        """Store the image and return its public URL, or raise UploadFailure."""
        ct = (content_type or "").lower()
        if ct not in _CONTENT_TYPES:
            raise UploadFailure("Unsupported image format (use JPEG or PNG).")
        if not data:
            raise UploadFailure("Empty image.")
        if len(data) > self.max_bytes:
            raise UploadFailure(f"Image exceeds {self.max_bytes // (1024 * 1024)}MB.")
        image_format, default_ext = _CONTENT_TYPES[ct]
        if not _has_valid_signature(data, image_format):
            raise UploadFailure("Invalid image file.")

        payload = _normalize_image(data, image_format, AVATAR_MAX_SIZE)
        path = self.storage_path(user_id, filename, default_ext)
        try:
            self.storage.store(self.bucket, path, payload, ct)
            url = self.storage.public_url(self.bucket, path)
        except (OSError, ValueError) as exc:
            logger.error("Error uploading image for %s: %s", user_id, exc)
            raise UploadFailure("Failed to upload image. Please try again.") from exc
        logger.info("Stored avatar %s/%s", self.bucket, path)
        return url
