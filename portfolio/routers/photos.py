from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from portfolio.domain.records import Photo
from portfolio.repositories.base import StorageWriteError
from portfolio.services.collection_store import RecordNotFoundError, StorageUnavailableError
from portfolio.services.display import lightbox_neighbors
from portfolio.services.uploads import UploadError, discard_photo, store_photo
from portfolio.routers.deps import (
    NOT_FOUND_MESSAGE,
    apply_delete,
    get_store,
    render_list,
    storage_error_message,
)

router = APIRouter(prefix="", tags=["photos"])


def _page(request: Request, *, saved: str = "", error: str = "", status_code: int = 200):
    notice = {"1": "Photo added successfully!", "deleted": "Photo deleted."}.get(saved, "")
    return render_list(
        request,
        "gallery.html",
        {"notice": notice, "error": error},
        status_code=status_code,
    )


@router.get("/gallery", response_class=HTMLResponse)
def gallery(request: Request, saved: str = ""):
    return _page(request, saved=saved)


@router.get("/gallery/{index}", response_class=HTMLResponse)
def lightbox(request: Request, index: int):
    photos = get_store(request).snapshot().photos
    if not 0 <= index < len(photos):
        raise HTTPException(404, "Photo not found")
    prev_index, next_index = lightbox_neighbors(index, len(photos))
    return render_list(
        request,
        "lightbox.html",
        {"photo": photos[index], "index": index, "prev_index": prev_index, "next_index": next_index},
    )


@router.post("/photos")
def add_photo(
    request: Request,
    title: str = Form(""),
    caption: str = Form(""),
    thumbnail: str = Form(""),
    full: str = Form(""),
    location: str = Form(""),
    file: Optional[UploadFile] = File(None),
):
    full = full.strip()
    thumbnail = thumbnail.strip()
    settings = request.app.state.settings
    stored = None
    if file is not None and file.filename:
        data = file.file.read()
        try:
            stored = store_photo(
                data,
                file.content_type or "",
                settings.uploads_dir,
                max_bytes=settings.max_upload_bytes,
            )
        except UploadError as exc:
            return _page(request, error=str(exc), status_code=400)
        full = full or stored.full
        thumbnail = thumbnail or stored.thumbnail
    photo = Photo(
        title=title,
        caption=caption,
        thumbnail=thumbnail or full,
        full=full or thumbnail,
        location=location,
    )
    store = get_store(request)
    try:
        with store.editing():
            store.append("photos", photo)
    except (StorageWriteError, StorageUnavailableError) as exc:
        if stored is not None:
            discard_photo(stored, settings.uploads_dir)
        return _page(request, error=storage_error_message(exc), status_code=503)
    return RedirectResponse("/gallery?saved=1", status_code=303)


@router.post("/photos/{index}/delete")
def delete_photo(request: Request, index: int, uid: str = Form("")):
    try:
        apply_delete(get_store(request), "photos", index, uid)
    except RecordNotFoundError:
        return _page(request, error=NOT_FOUND_MESSAGE, status_code=404)
    except (StorageWriteError, StorageUnavailableError) as exc:
        return _page(request, error=storage_error_message(exc), status_code=503)
    return RedirectResponse("/gallery?saved=deleted", status_code=303)
