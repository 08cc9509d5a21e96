"""
Persistence adapters.

Every adapter implements the same key/value port (get_item/set_item/
remove_item). The collection store receives one of them in its constructor
and never touches files or tables directly.
"""

from __future__ import annotations

from portfolio.core.config import Settings

from .base import (
    Storage,
    StorageDecodeError,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
)
from .json_storage import JsonFileStorage
from .memory_storage import MemoryStorage
from .sql_storage import SQLStorage


def build_storage(settings: Settings) -> Storage:
    """Pick the adapter named by STORAGE_BACKEND."""
    backend = settings.storage_backend
    quota = settings.storage_quota_bytes or None
    if backend == "json":
        return JsonFileStorage(settings.data_dir, quota_bytes=quota)
    if backend == "memory":
        return MemoryStorage(quota_bytes=quota)
    if backend == "sql":
        return SQLStorage(quota_bytes=quota)
    raise ValueError(f"unknown STORAGE_BACKEND '{backend}' (expected json, sql or memory)")


__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "SQLStorage",
    "Storage",
    "StorageDecodeError",
    "StorageQuotaExceededError",
    "StorageReadError",
    "StorageWriteError",
    "build_storage",
]
