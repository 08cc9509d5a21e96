from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from portfolio.services.display import VIDEO_PLACEHOLDER, featured
from portfolio.routers.deps import featured_count, get_store, get_templates, load_warning

router = APIRouter(prefix="", tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    snap = get_store(request).snapshot()
    count = featured_count(request)
    context = {
        "featured_articles": featured(snap.articles, count),
        "featured_photos": featured(snap.photos, count),
        "featured_videos": featured(snap.videos, count),
        "video_placeholder": VIDEO_PLACEHOLDER,
        "warning": load_warning(snap.load_error),
    }
    return get_templates(request).TemplateResponse(request, "home.html", context)


# Chrome devtools requests this on every page load; answer with an empty 204
@router.get("/.well-known/appspecific/com.chrome.devtools.json")
def chrome_devtools_wellknown():
    return PlainTextResponse("", status_code=204)
