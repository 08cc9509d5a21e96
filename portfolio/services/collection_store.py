"""
Collection store: the only path through which portfolio content is read or
changed.

The three collections (articles, photos, videos) share one persisted JSON
document stored under a single storage key, so saving is all-or-nothing
across collections. ``append`` and the ``delete_*`` methods only touch the
in-memory lists; callers persist with ``save()`` or wrap the whole
load/mutate/save sequence in ``editing()``.

Several server processes writing the same storage are last-write-wins; the
lock below only serializes threads of one process.
"""

from __future__ import annotations

import json
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional

from loguru import logger

from portfolio.domain.records import COLLECTIONS, RECORD_TYPES, RecordShapeError
from portfolio.repositories.base import (
    Storage,
    StorageDecodeError,
    StorageReadError,
    StorageWriteError,
)

DEFAULT_STORAGE_KEY = "portfolioData"


class StoreError(Exception):
    """Base exception for collection store failures."""


class UnknownCollectionError(StoreError):
    """Raised for a collection name other than articles, photos or videos."""


class RecordNotFoundError(StoreError):
    """Raised when a delete targets an index or uid that does not exist."""


class CorruptDocumentError(StoreError):
    """Stored content could not be read as a portfolio document."""


class StorageUnavailableError(StoreError):
    """The storage medium failed while reading; the stored document is unknown."""


@dataclass
class Snapshot:
    """Copies of the three collections taken right after a load."""

    articles: list = field(default_factory=list)
    photos: list = field(default_factory=list)
    videos: list = field(default_factory=list)
    load_error: Optional[StoreError] = None


def new_uid() -> str:
    return uuid.uuid4().hex


class CollectionStore:
    def __init__(self, storage: Storage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.load_error: Optional[StoreError] = None
        self.dirty = False
        self._lock = threading.RLock()
        self._collections: dict[str, list] = {name: [] for name in COLLECTIONS}

    # -------------------------- persistence --------------------------
    def load(self) -> None:
        """Replace the in-memory collections with the stored document.

        Never raises: a missing document or field yields empty collections,
        and unreadable content yields empty collections plus ``load_error``
        (CorruptDocumentError). A failing storage medium also yields empty
        collections, with a StorageUnavailableError in ``load_error``.
        """
        try:
            self._collections = self._parse(self._read())
            self.load_error = None
        except CorruptDocumentError as exc:
            logger.warning("Stored document '{}' is unreadable, starting empty: {}", self.key, exc)
            self._collections = {name: [] for name in COLLECTIONS}
            self.load_error = exc
        except StorageUnavailableError as exc:
            logger.error("Storage for '{}' could not be read: {}", self.key, exc)
            self._collections = {name: [] for name in COLLECTIONS}
            self.load_error = exc
        self.dirty = False
        logger.debug(
            "Loaded '{}': {}",
            self.key,
            ", ".join(f"{name}={len(items)}" for name, items in self._collections.items()),
        )

    def _read(self) -> Optional[str]:
        try:
            return self.storage.get_item(self.key)
        except StorageDecodeError as exc:
            raise CorruptDocumentError(str(exc)) from exc
        except StorageReadError as exc:
            raise StorageUnavailableError(str(exc)) from exc

    def _parse(self, raw: Optional[str]) -> dict[str, list]:
        collections: dict[str, list] = {name: [] for name in COLLECTIONS}
        if raw is None:
            return collections
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise CorruptDocumentError(f"not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptDocumentError(f"expected an object, got {type(data).__name__}")
        for name, record_type in RECORD_TYPES.items():
            items = data.get(name)
            if items is None:
                continue
            if not isinstance(items, list):
                raise CorruptDocumentError(f"'{name}' must be a list, got {type(items).__name__}")
            try:
                collections[name] = [record_type.from_dict(item) for item in items]
            except RecordShapeError as exc:
                raise CorruptDocumentError(f"bad record in '{name}': {exc}") from exc
        return collections

    def to_document(self) -> dict:
        return {name: [record.to_dict() for record in items] for name, items in self._collections.items()}

    def save(self) -> None:
        """Write all three collections as one document, overwriting the old one.

        Storage failures propagate as StorageWriteError and leave the store
        dirty.
        """
        payload = json.dumps(self.to_document(), ensure_ascii=False)
        try:
            self.storage.set_item(self.key, payload)
        except StorageWriteError:
            logger.error("Saving '{}' failed; in-memory changes are not persisted", self.key)
            raise
        self.dirty = False
        if self.load_error is not None:
            logger.info("Unreadable document '{}' replaced by a fresh save", self.key)
            self.load_error = None
        logger.debug("Saved '{}' ({} bytes)", self.key, len(payload))

    # -------------------------- mutations --------------------------
    def _collection(self, name: str) -> list:
        try:
            return self._collections[name]
        except KeyError:
            raise UnknownCollectionError(
                f"unknown collection '{name}' (expected {', '.join(COLLECTIONS)})"
            ) from None

    def items(self, name: str) -> list:
        return list(self._collection(name))

    def append(self, name: str, record: Any):
        """Push a record to the end of a collection (not persisted)."""
        items = self._collection(name)
        record_type = RECORD_TYPES[name]
        if isinstance(record, Mapping):
            record = record_type.from_dict(record)
        elif not isinstance(record, record_type):
            raise RecordShapeError(f"{name} only holds {record_type.__name__} records")
        if not record.uid:
            record.uid = new_uid()
        items.append(record)
        self.dirty = True
        return record

    def delete_at(self, name: str, index: int):
        """Remove the record at ``index``; later records shift down by one."""
        items = self._collection(name)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(items):
            raise RecordNotFoundError(f"no record at index {index} in '{name}' (size {len(items)})")
        removed = items.pop(index)
        self.dirty = True
        logger.info("Deleted {}[{}] '{}'", name, index, removed.title)
        return removed

    def index_of(self, name: str, uid: str) -> int:
        for index, record in enumerate(self._collection(name)):
            if uid and record.uid == uid:
                return index
        raise RecordNotFoundError(f"no record with uid '{uid}' in '{name}'")

    def delete_by_uid(self, name: str, uid: str):
        return self.delete_at(name, self.index_of(name, uid))

    def replace(self, name: str, records: list) -> None:
        self._collection(name)
        record_type = RECORD_TYPES[name]
        self._collections[name] = [r if isinstance(r, record_type) else record_type.from_dict(r) for r in records]
        self.dirty = True

    # -------------------------- entry points --------------------------
    @contextmanager
    def editing(self) -> Iterator["CollectionStore"]:
        """Load, let the caller mutate, then save; all under the store lock.

        If the block raises, nothing is saved. When the storage could not be
        read at all, StorageUnavailableError is raised before the block runs
        so the unknown stored document is never overwritten.
        """
        with self._lock:
            self.load()
            if isinstance(self.load_error, StorageUnavailableError):
                raise self.load_error
            yield self
            self.save()

    def snapshot(self) -> Snapshot:
        with self._lock:
            self.load()
            return Snapshot(
                articles=self.items("articles"),
                photos=self.items("photos"),
                videos=self.items("videos"),
                load_error=self.load_error,
            )
