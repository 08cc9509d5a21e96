from __future__ import annotations

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from portfolio.domain.records import RecordShapeError, Video, VideoSource
from portfolio.repositories.base import StorageWriteError
from portfolio.services.collection_store import RecordNotFoundError, StorageUnavailableError
from portfolio.routers.deps import (
    NOT_FOUND_MESSAGE,
    apply_delete,
    get_store,
    render_list,
    storage_error_message,
)

router = APIRouter(prefix="/videos", tags=["videos"])

SOURCE_LABELS = {
    VideoSource.YOUTUBE.value: "YouTube",
    VideoSource.VIMEO.value: "Vimeo",
    VideoSource.GOOGLEDRIVE.value: "Google Drive",
    VideoSource.OTHER.value: "Other (https embed URL)",
}


def _page(request: Request, *, saved: str = "", error: str = "", status_code: int = 200):
    notice = {"1": "Video added successfully!", "deleted": "Video deleted."}.get(saved, "")
    return render_list(
        request,
        "videos.html",
        {"notice": notice, "error": error, "sources": SOURCE_LABELS},
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
def list_videos(request: Request, saved: str = ""):
    return _page(request, saved=saved)


@router.post("")
def add_video(
    request: Request,
    title: str = Form(""),
    source: str = Form(""),
    id: str = Form(""),
    description: str = Form(""),
):
    try:
        video = Video(title=title, source=source.strip().lower(), id=id, description=description)
    except RecordShapeError as exc:
        return _page(request, error=str(exc), status_code=400)
    store = get_store(request)
    try:
        with store.editing():
            store.append("videos", video)
    except (StorageWriteError, StorageUnavailableError) as exc:
        return _page(request, error=storage_error_message(exc), status_code=503)
    return RedirectResponse("/videos?saved=1", status_code=303)


@router.post("/{index}/delete")
def delete_video(request: Request, index: int, uid: str = Form("")):
    try:
        apply_delete(get_store(request), "videos", index, uid)
    except RecordNotFoundError:
        return _page(request, error=NOT_FOUND_MESSAGE, status_code=404)
    except (StorageWriteError, StorageUnavailableError) as exc:
        return _page(request, error=storage_error_message(exc), status_code=503)
    return RedirectResponse("/videos?saved=deleted", status_code=303)
