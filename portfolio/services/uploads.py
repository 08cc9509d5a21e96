"""Photo uploads: signature check, resize, write under the uploads dir."""
from __future__ import annotations

import hashlib
import io
import os
import secrets
from dataclasses import dataclass

from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError

JPEG_MAGIC = b"\xFF\xD8\xFF"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"

FULL_MAX_SIZE = (2000, 2000)
THUMB_MAX_SIZE = (600, 600)


class UploadError(Exception):
    """Raised when an uploaded image is rejected."""


@dataclass(frozen=True)
class StoredPhoto:
    full: str
    thumbnail: str


def has_valid_signature(data: bytes, content_type: str) -> bool:
    if content_type in {"image/jpeg", "image/jpg", "image/pjpeg"}:
        return data.startswith(JPEG_MAGIC)
    if content_type == "image/png":
        return data.startswith(PNG_MAGIC)
    return False


def _write_resized(image: Image.Image, dest_dir: str, filename: str, max_size: tuple[int, int]) -> str:
    copy = image.copy()
    copy.thumbnail(max_size, Image.LANCZOS)
    buffer = io.BytesIO()
    copy.save(buffer, format="JPEG", quality=85, optimize=True)
    payload = buffer.getvalue()
    os.makedirs(dest_dir, exist_ok=True)
    with open(os.path.join(dest_dir, filename), "wb") as f:
        f.write(payload)
    etag = hashlib.md5(payload).hexdigest()[:8]
    return f"/static/uploads/{filename}?v={etag}"


def store_photo(data: bytes, content_type: str, uploads_dir: str, *, max_bytes: int) -> StoredPhoto:
    """Save a full-size copy and a thumbnail; return their public paths."""
    if not data:
        raise UploadError("Empty file.")
    if max_bytes and len(data) > max_bytes:
        raise UploadError(f"Image is larger than {max_bytes // 1024} KB.")
    if not has_valid_signature(data, (content_type or "").lower()):
        raise UploadError("Only JPEG or PNG images are accepted.")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise UploadError("Invalid image file.") from exc
    try:
        image = ImageOps.exif_transpose(image)
    except Exception:
        pass
    image = image.convert("RGB")
    stem = secrets.token_hex(8)
    full = _write_resized(image, uploads_dir, f"{stem}.jpg", FULL_MAX_SIZE)
    thumbnail = _write_resized(image, uploads_dir, f"{stem}_thumb.jpg", THUMB_MAX_SIZE)
    logger.info("Stored uploaded photo {} ({} bytes)", stem, len(data))
    return StoredPhoto(full=full, thumbnail=thumbnail)


def discard_photo(stored: StoredPhoto, uploads_dir: str) -> None:
    """Remove the files written by store_photo, e.g. after the save failed."""
    for public_path in (stored.full, stored.thumbnail):
        filename = os.path.basename(public_path.split("?", 1)[0])
        try:
            os.remove(os.path.join(uploads_dir, filename))
        except FileNotFoundError:
            continue
        logger.info("Discarded unsaved upload {}", filename)
