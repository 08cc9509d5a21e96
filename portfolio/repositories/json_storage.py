"""
File-based persistence adapter.

Each storage key maps to one file (``<data_dir>/<key>.json``) holding the raw
value written by the store. Writes go through a temporary file and
``os.replace`` so a crash never leaves a half-written document behind.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from loguru import logger

from .base import (
    DEFAULT_QUOTA_BYTES,
    StorageDecodeError,
    StorageReadError,
    StorageWriteError,
    check_quota,
)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]{1,128}$")


class JsonFileStorage:
    def __init__(self, data_dir: str | os.PathLike, quota_bytes: int | None = DEFAULT_QUOTA_BYTES) -> None:
        self.data_dir = Path(data_dir)
        self.quota_bytes = quota_bytes

    def _path(self, key: str) -> Path:
        if not _KEY_RE.fullmatch(key or "") or key.startswith("."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            logger.warning("{} is not valid UTF-8: {}", path, exc)
            raise StorageDecodeError(f"{path} is not valid UTF-8 text") from exc
        except OSError as exc:
            logger.error("Failed to read {}: {}", path, exc)
            raise StorageReadError(f"could not read {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        check_quota(key, value, self.quota_bytes)
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            logger.error("Failed to write {}: {}", path, exc)
            raise StorageWriteError(f"could not write {path}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
