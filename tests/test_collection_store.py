"""
Behaviour of the CollectionStore over an in-memory storage backend.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the portfolio package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.domain.records import Article, Photo, RecordShapeError, Video  # noqa: E402
from portfolio.repositories.base import (  # noqa: E402
    StorageDecodeError,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
)
from portfolio.repositories.memory_storage import MemoryStorage  # noqa: E402
from portfolio.services.collection_store import (  # noqa: E402
    CollectionStore,
    CorruptDocumentError,
    RecordNotFoundError,
    StorageUnavailableError,
    UnknownCollectionError,
)

KEY = "portfolioData"

DOCUMENT = {
    "articles": [
        {"title": "A", "outlet": "B", "date": "2024-01-01", "url": "http://x", "description": ""},
        {"title": "C", "outlet": "D", "date": "2023-05-17", "url": "https://y", "description": "long read"},
    ],
    "photos": [
        {"title": "Dunes", "caption": "Sahara", "thumbnail": "t.jpg", "full": "f.jpg", "location": "Morocco"},
    ],
    "videos": [
        {"title": "Talk", "source": "youtube", "id": "dQw4w9WgXcQ", "description": "keynote"},
    ],
}


class FailingStorage(MemoryStorage):
    def set_item(self, key: str, value: str) -> None:
        raise StorageWriteError("disk full")


class UnreadableStorage(MemoryStorage):
    def __init__(self, error: StorageReadError) -> None:
        super().__init__()
        self.error = error

    def get_item(self, key: str):
        raise self.error


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def store(storage):
    s = CollectionStore(storage, key=KEY)
    s.load()
    return s


def _article(title: str) -> Article:
    return Article(title=title, outlet="Outlet", date="2024-02-02", url="https://example.com", description="")


def test_load_without_document_gives_empty_collections(store):
    assert store.items("articles") == []
    assert store.items("photos") == []
    assert store.items("videos") == []
    assert store.load_error is None


def test_round_trip_keeps_document(storage):
    storage.set_item(KEY, json.dumps(DOCUMENT))
    s = CollectionStore(storage, key=KEY)
    s.load()
    s.save()
    assert json.loads(storage.get_item(KEY)) == DOCUMENT


def test_missing_photos_field_loads_as_empty(storage):
    doc = {"articles": DOCUMENT["articles"], "videos": DOCUMENT["videos"]}
    storage.set_item(KEY, json.dumps(doc))
    s = CollectionStore(storage, key=KEY)
    s.load()
    assert s.items("photos") == []
    assert len(s.items("articles")) == 2
    assert s.load_error is None
    s.save()
    assert json.loads(storage.get_item(KEY))["photos"] == []


def test_append_save_load_grows_by_one(store, storage):
    store.append("articles", _article("first"))
    store.save()
    before = len(store.items("articles"))

    appended = store.append("articles", _article("second"))
    store.save()

    fresh = CollectionStore(storage, key=KEY)
    fresh.load()
    articles = fresh.items("articles")
    assert len(articles) == before + 1
    assert articles[-1] == appended


def test_append_assigns_uid_and_accepts_dicts(store):
    record = store.append("photos", {"title": "P", "caption": "", "thumbnail": "t", "full": "f"})
    assert isinstance(record, Photo)
    assert len(record.uid) == 32
    assert record.location == ""


def test_append_does_not_persist_until_save(store, storage):
    store.append("articles", _article("draft"))
    assert store.dirty is True
    assert storage.get_item(KEY) is None
    store.save()
    assert store.dirty is False
    assert storage.get_item(KEY) is not None


def test_delete_at_shifts_later_records(store):
    for title in ["a", "b", "c", "d"]:
        store.append("articles", _article(title))
    original = store.items("articles")

    removed = store.delete_at("articles", 1)

    remaining = store.items("articles")
    assert removed.title == "b"
    assert len(remaining) == 3
    assert remaining[0] is original[0]
    assert remaining[1] is original[2]
    assert remaining[2] is original[3]


def test_double_delete_on_single_record_is_reported(store):
    store.append("videos", Video(title="v", source="vimeo", id="123", description=""))
    store.delete_at("videos", 0)
    with pytest.raises(RecordNotFoundError):
        store.delete_at("videos", 0)
    assert store.items("videos") == []


@pytest.mark.parametrize("index", [-1, 1, 99])
def test_delete_out_of_range_raises(store, index):
    store.append("articles", _article("only"))
    with pytest.raises(RecordNotFoundError):
        store.delete_at("articles", index)
    assert len(store.items("articles")) == 1


def test_delete_rejects_bool_index(store):
    store.append("articles", _article("first"))
    store.append("articles", _article("second"))
    with pytest.raises(RecordNotFoundError):
        store.delete_at("articles", True)
    assert [a.title for a in store.items("articles")] == ["first", "second"]


def test_delete_by_uid_ignores_positions(store):
    a = store.append("articles", _article("a"))
    b = store.append("articles", _article("b"))
    store.delete_at("articles", 0)
    removed = store.delete_by_uid("articles", b.uid)
    assert removed.title == "b"
    with pytest.raises(RecordNotFoundError):
        store.delete_by_uid("articles", a.uid)


def test_unknown_collection(store):
    with pytest.raises(UnknownCollectionError):
        store.append("podcasts", {"title": "x"})
    with pytest.raises(UnknownCollectionError):
        store.delete_at("podcasts", 0)


def test_append_rejects_wrong_record_type(store):
    with pytest.raises(RecordShapeError):
        store.append("articles", Photo(title="not an article"))


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"articles": "nope"}),
        json.dumps({"videos": [{"title": "x", "source": "dailymotion", "id": "1", "description": ""}]}),
        json.dumps({"photos": [{"title": 5}]}),
    ],
)
def test_corrupt_document_falls_back_to_empty(storage, raw):
    storage.set_item(KEY, raw)
    s = CollectionStore(storage, key=KEY)
    s.load()
    assert isinstance(s.load_error, CorruptDocumentError)
    assert s.to_document() == {"articles": [], "photos": [], "videos": []}


def test_save_after_corruption_replaces_document(storage):
    storage.set_item(KEY, "{broken")
    s = CollectionStore(storage, key=KEY)
    with s.editing():
        assert s.load_error is not None
        s.append("articles", _article("fresh"))
    assert s.load_error is None
    assert json.loads(storage.get_item(KEY))["articles"][0]["title"] == "fresh"


def test_undecodable_value_is_treated_as_corrupt():
    s = CollectionStore(UnreadableStorage(StorageDecodeError("not UTF-8")), key=KEY)
    s.load()
    assert isinstance(s.load_error, CorruptDocumentError)
    assert s.to_document() == {"articles": [], "photos": [], "videos": []}


def test_read_failure_is_reported_and_blocks_editing():
    storage = UnreadableStorage(StorageReadError("connection lost"))
    s = CollectionStore(storage, key=KEY)
    s.load()
    assert isinstance(s.load_error, StorageUnavailableError)
    assert s.snapshot().articles == []

    with pytest.raises(StorageUnavailableError):
        with s.editing():
            s.append("articles", _article("never saved"))
    assert storage._items == {}


def test_failed_save_surfaces_and_keeps_dirty():
    s = CollectionStore(FailingStorage(), key=KEY)
    s.load()
    s.append("articles", _article("lost"))
    with pytest.raises(StorageWriteError):
        s.save()
    assert s.dirty is True


def test_quota_exceeded_is_a_write_error():
    s = CollectionStore(MemoryStorage(quota_bytes=64), key=KEY)
    s.load()
    s.append("articles", _article("x" * 200))
    with pytest.raises(StorageQuotaExceededError):
        s.save()


def test_editing_skips_save_when_block_raises(store, storage):
    with store.editing():
        store.append("articles", _article("kept"))
    with pytest.raises(RecordNotFoundError):
        with store.editing():
            store.append("articles", _article("dropped"))
            store.delete_at("articles", 10)
    assert [a["title"] for a in json.loads(storage.get_item(KEY))["articles"]] == ["kept"]


def test_snapshot_rereads_storage(store, storage):
    other = CollectionStore(storage, key=KEY)
    with other.editing():
        other.append("videos", Video(title="elsewhere", source="youtube", id="abc", description=""))
    snap = store.snapshot()
    assert [v.title for v in snap.videos] == ["elsewhere"]
    assert snap.load_error is None


def test_replace_collection(store):
    store.replace("photos", [{"title": "one"}, Photo(title="two")])
    assert [p.title for p in store.items("photos")] == ["one", "two"]


def test_fresh_process_scenario(storage):
    first = CollectionStore(storage, key=KEY)
    first.load()
    record = {"title": "A", "outlet": "B", "date": "2024-01-01", "url": "http://x", "description": ""}
    appended = first.append("articles", record)
    first.save()

    reloaded = CollectionStore(storage, key=KEY)
    reloaded.load()
    articles = reloaded.items("articles")
    assert len(articles) == 1
    assert articles[0] == appended
    assert {k: v for k, v in articles[0].to_dict().items() if k != "uid"} == record
