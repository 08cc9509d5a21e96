"""
Portfolio site: articles, photos and videos kept in one stored document.

Run with:
  uvicorn portfolio.app:create_app --factory
"""
from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from portfolio.core.config import ROOT, Settings, get_settings
from portfolio.core.logging import setup_logging
from portfolio.repositories import Storage, build_storage
from portfolio.routers import articles as articles_router
from portfolio.routers import pages as pages_router
from portfolio.routers import photos as photos_router
from portfolio.routers import videos as videos_router
from portfolio.services.collection_store import CollectionStore
from portfolio.services.display import (
    format_long_date,
    format_short_date,
    safe_href,
    safe_image_src,
    truncate,
)
from portfolio.services.embeds import embed_src

WEB = str(ROOT / "web")
TEMPLATES = str(ROOT / "templates")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self' 'unsafe-inline'; "
            "frame-src https:; "
            "object-src 'none'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class CachedStaticFiles(StaticFiles):
    def set_headers(self, scope, resp, path, stat_result):
        # uploads carry a content hash in ?v=, so they can be cached for good
        resp.headers["Cache-Control"] = "public, max-age=31536000, immutable"


def build_templates() -> Jinja2Templates:
    templates = Jinja2Templates(directory=TEMPLATES)
    templates.env.filters["long_date"] = format_long_date
    templates.env.filters["short_date"] = format_short_date
    templates.env.filters["truncate_text"] = truncate
    templates.env.filters["embed_src"] = embed_src
    templates.env.filters["safe_href"] = safe_href
    templates.env.filters["safe_image_src"] = safe_image_src
    return templates


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn; tests inject settings and storage."""
    settings = settings or get_settings()
    setup_logging()

    app = FastAPI(title="Portfolio")
    os.makedirs(settings.uploads_dir, exist_ok=True)
    app.mount("/static/uploads", CachedStaticFiles(directory=settings.uploads_dir), name="uploads")
    app.mount("/static", StaticFiles(directory=WEB), name="static")
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    storage = storage if storage is not None else build_storage(settings)
    app.state.settings = settings
    app.state.store = CollectionStore(storage, key=settings.storage_key)
    app.state.templates = build_templates()

    app.include_router(pages_router.router)
    app.include_router(articles_router.router)
    app.include_router(photos_router.router)
    app.include_router(videos_router.router)

    logger.info(
        "Portfolio app ready (env={}, storage={}, key={})",
        settings.app_env,
        type(storage).__name__,
        settings.storage_key,
    )
    return app
