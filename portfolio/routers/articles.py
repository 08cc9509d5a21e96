from __future__ import annotations

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from portfolio.domain.records import Article
from portfolio.repositories.base import StorageWriteError
from portfolio.services.collection_store import RecordNotFoundError, StorageUnavailableError
from portfolio.routers.deps import (
    NOT_FOUND_MESSAGE,
    apply_delete,
    get_store,
    render_list,
    storage_error_message,
)

router = APIRouter(prefix="/articles", tags=["articles"])


def _page(request: Request, *, saved: str = "", error: str = "", status_code: int = 200):
    notice = {"1": "Article added successfully!", "deleted": "Article deleted."}.get(saved, "")
    return render_list(
        request,
        "articles.html",
        {"notice": notice, "error": error},
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
def list_articles(request: Request, saved: str = ""):
    return _page(request, saved=saved)


@router.post("")
def add_article(
    request: Request,
    title: str = Form(""),
    outlet: str = Form(""),
    date: str = Form(""),
    url: str = Form(""),
    description: str = Form(""),
):
    article = Article(title=title, outlet=outlet, date=date, url=url, description=description)
    store = get_store(request)
    try:
        with store.editing():
            store.append("articles", article)
    except (StorageWriteError, StorageUnavailableError) as exc:
        return _page(request, error=storage_error_message(exc), status_code=503)
    return RedirectResponse("/articles?saved=1", status_code=303)


@router.post("/{index}/delete")
def delete_article(request: Request, index: int, uid: str = Form("")):
    try:
        apply_delete(get_store(request), "articles", index, uid)
    except RecordNotFoundError:
        return _page(request, error=NOT_FOUND_MESSAGE, status_code=404)
    except (StorageWriteError, StorageUnavailableError) as exc:
        return _page(request, error=storage_error_message(exc), status_code=503)
    return RedirectResponse("/articles?saved=deleted", status_code=303)
