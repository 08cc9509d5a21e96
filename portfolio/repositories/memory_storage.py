"""In-process storage adapter, used by tests and throwaway runs."""

from __future__ import annotations

from typing import Dict, Optional

from .base import DEFAULT_QUOTA_BYTES, check_quota


class MemoryStorage:
    def __init__(self, quota_bytes: int | None = DEFAULT_QUOTA_BYTES) -> None:
        self.quota_bytes = quota_bytes
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        check_quota(key, value, self.quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
