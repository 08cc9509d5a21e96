"""Key/value storage port shared by every persistence adapter."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class StorageReadError(Exception):
    """Raised when the storage medium cannot be read."""


class StorageDecodeError(StorageReadError):
    """Raised when a stored value is not valid text."""


class StorageWriteError(Exception):
    """Raised when the storage medium rejects a write."""


class StorageQuotaExceededError(StorageWriteError):
    """Raised when a value does not fit in the configured quota."""


@runtime_checkable
class Storage(Protocol):
    """String values addressed by string keys, like browser local storage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


def check_quota(key: str, value: str, quota_bytes: int | None) -> None:
    """Raise StorageQuotaExceededError when key+value exceed quota_bytes."""
    if not quota_bytes:
        return
    size = len(key.encode("utf-8")) + len(value.encode("utf-8"))
    if size > quota_bytes:
        raise StorageQuotaExceededError(
            f"value for '{key}' is {size} bytes, quota is {quota_bytes} bytes"
        )
