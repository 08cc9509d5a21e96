"""Helpers for the public list pages (dates, featured entries, lightbox)."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Sequence

VIDEO_PLACEHOLDER = (
    "data:image/svg+xml,%3Csvg xmlns=%22http://www.w3.org/2000/svg%22 viewBox=%220 0 400 300%22%3E"
    "%3Crect fill=%22%23333%22 width=%22400%22 height=%22300%22/%3E"
    "%3Ctext x=%2250%25%22 y=%2250%25%22 dominant-baseline=%22middle%22 text-anchor=%22middle%22 "
    "font-size=%2220%22 fill=%22%23fff%22%3EVideo%3C/text%3E%3C/svg%3E"
)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def parse_date(value: str | None) -> Optional[date]:
    """Parse the stored article date (YYYY-MM-DD, optionally with a time part)."""
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    m = _ISO_DATE_RE.match(v)
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def format_long_date(value: str | None) -> str:
    """'2024-01-05' -> 'January 5, 2024'; unparseable values are shown as stored."""
    parsed = parse_date(value)
    if not parsed:
        return value or ""
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_short_date(value: str | None) -> str:
    """'2024-01-05' -> 'Jan 2024'."""
    parsed = parse_date(value)
    if not parsed:
        return value or ""
    return f"{parsed.strftime('%b')} {parsed.year}"


def truncate(text: str | None, length: int = 80) -> str:
    t = text or ""
    if len(t) <= length:
        return t
    return t[:length] + "..."


def featured(items: Sequence, count: int = 3) -> list:
    return list(items[: max(0, count)])


def lightbox_neighbors(index: int, size: int) -> tuple[int, int]:
    """Previous and next positions, wrapping around the collection."""
    if size <= 0:
        raise ValueError("empty collection has no neighbors")
    return (index - 1 + size) % size, (index + 1) % size


_LINK_SCHEMES = {"http", "https", "mailto"}
_IMAGE_SCHEMES = {"http", "https"}


def _scheme(value: str) -> str:
    m = re.match(r"^\s*([A-Za-z][A-Za-z0-9+.-]*):", value or "")
    return m.group(1).lower() if m else ""


def safe_href(value: str | None) -> str:
    """External link target; script-capable schemes become '#'."""
    v = (value or "").strip()
    if not v:
        return "#"
    scheme = _scheme(v)
    if scheme and scheme not in _LINK_SCHEMES:
        return "#"
    return v


def safe_image_src(value: str | None) -> str:
    """Image reference: URLs, site paths or data:image URIs."""
    v = (value or "").strip()
    scheme = _scheme(v)
    if not scheme:
        return v
    if scheme == "data":
        return v if v[5:].lower().startswith("image/") and not v[5:].lower().startswith("image/svg") else ""
    return v if scheme in _IMAGE_SCHEMES else ""
