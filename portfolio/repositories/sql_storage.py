"""Key/value storage backed by SQLAlchemy (one row per key)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from portfolio.db.models import StorageItem
from portfolio.db.session import get_session

from .base import DEFAULT_QUOTA_BYTES, StorageReadError, StorageWriteError, check_quota


class SQLStorage:
    """Storage port over the ``storage_items`` table."""

    def __init__(self, quota_bytes: int | None = DEFAULT_QUOTA_BYTES) -> None:
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                entity = session.get(StorageItem, key)
                return entity.value if entity else None
        except SQLAlchemyError as exc:
            logger.error("Failed to read storage key {}: {}", key, exc)
            raise StorageReadError(f"could not read '{key}': {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        check_quota(key, value, self.quota_bytes)
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                entity = session.get(StorageItem, key)
                if not entity:
                    session.add(StorageItem(key=key, value=value, updated_at=now))
                else:
                    entity.value = value
                    entity.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to write storage key {}: {}", key, exc)
            raise StorageWriteError(f"could not write '{key}': {exc}") from exc

    def remove_item(self, key: str) -> None:
        with get_session() as session:
            session.execute(delete(StorageItem).where(StorageItem.key == key))
            session.commit()
