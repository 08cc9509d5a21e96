"""
Configuration helpers for the portfolio site.

Routers, services and scripts read settings through get_settings() instead of
fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    data_dir: str
    database_url: str
    storage_key: str
    storage_quota_bytes: int
    uploads_dir: str
    max_upload_bytes: int
    featured_count: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        data_dir=os.getenv("DATA_DIR", str(ROOT / "data")),
        database_url=os.getenv("DATABASE_URL", ""),
        storage_key=os.getenv("STORAGE_KEY", "portfolioData").strip() or "portfolioData",
        storage_quota_bytes=_int(os.getenv("STORAGE_QUOTA_BYTES", "5242880"), 5 * 1024 * 1024),
        uploads_dir=os.getenv("UPLOADS_DIR", str(ROOT / "web" / "uploads")),
        max_upload_bytes=_int(os.getenv("MAX_UPLOAD_BYTES", "2097152"), 2 * 1024 * 1024),
        featured_count=max(0, _int(os.getenv("FEATURED_COUNT", "3"), 3)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
