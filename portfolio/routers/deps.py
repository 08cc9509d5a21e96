"""Request-scoped accessors and messages shared by the page routers."""
from __future__ import annotations

from fastapi import Request
from fastapi.templating import Jinja2Templates

from portfolio.repositories.base import StorageQuotaExceededError, StorageWriteError
from portfolio.services.collection_store import CollectionStore, StorageUnavailableError, StoreError

CORRUPT_DOCUMENT_MESSAGE = (
    "Stored portfolio data was unreadable and has been ignored. "
    "Adding or deleting an entry will replace it."
)
UNAVAILABLE_MESSAGE = (
    "Portfolio data could not be read from storage right now. "
    "Nothing can be added or deleted until it is reachable again."
)
NOT_FOUND_MESSAGE = "That entry no longer exists. The list below is up to date."


def get_store(request: Request) -> CollectionStore:
    store = getattr(getattr(request.app, "state", None), "store", None)
    if not store:
        raise RuntimeError("CollectionStore not configured")
    return store


def get_templates(request: Request) -> Jinja2Templates:
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def featured_count(request: Request) -> int:
    settings = getattr(request.app.state, "settings", None)
    return settings.featured_count if settings else 3


def load_warning(error: StoreError | None) -> str:
    if error is None:
        return ""
    if isinstance(error, StorageUnavailableError):
        return UNAVAILABLE_MESSAGE
    return CORRUPT_DOCUMENT_MESSAGE


def storage_error_message(exc: StorageWriteError | StorageUnavailableError) -> str:
    if isinstance(exc, StorageUnavailableError):
        return "Could not save: the storage could not be read. Your change was not kept."
    if isinstance(exc, StorageQuotaExceededError):
        return "Could not save: the storage quota is full. Remove some entries and try again."
    return "Could not save: the storage rejected the write. Your change was not kept."


def apply_delete(store: CollectionStore, collection: str, index: int, uid: str = "") -> None:
    """Delete by uid when the form sent one, by position otherwise, then save."""
    with store.editing():
        if uid:
            store.delete_by_uid(collection, uid)
        else:
            store.delete_at(collection, index)


def render_list(request: Request, template: str, context: dict, *, status_code: int = 200):
    snap = get_store(request).snapshot()
    page = {
        "articles": snap.articles,
        "photos": snap.photos,
        "videos": snap.videos,
        "warning": load_warning(snap.load_error),
    }
    page.update(context)
    return get_templates(request).TemplateResponse(request, template, page, status_code=status_code)
