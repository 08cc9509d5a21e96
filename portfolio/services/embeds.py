"""Video embed URLs.

Only iframe ``src`` URLs are produced here; the template builds the iframe
itself and escapes the URL. Free-form markup entered for the "other" source
is never rendered as-is: an https URL, or the https ``src`` of a pasted
iframe snippet, is the only thing accepted from it.
"""
from __future__ import annotations

import html
import re
import urllib.parse as urlparse
from typing import Optional

from portfolio.domain.records import Video, VideoSource

PROVIDER_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")
IFRAME_SRC_RE = re.compile(r"<iframe\b[^>]*?\bsrc\s*=\s*([\"'])(.*?)\1", re.IGNORECASE | re.DOTALL)

PROVIDER_TEMPLATES = {
    VideoSource.VIMEO.value: "https://player.vimeo.com/video/{id}",
    VideoSource.YOUTUBE.value: "https://www.youtube.com/embed/{id}",
    VideoSource.GOOGLEDRIVE.value: "https://drive.google.com/file/d/{id}/preview",
}


def _https_url(value: str) -> Optional[str]:
    v = (value or "").strip()
    try:
        parsed = urlparse.urlparse(v)
    except ValueError:
        return None
    if parsed.scheme.lower() != "https" or not parsed.hostname:
        return None
    if any(ch in v for ch in "<>\"'` \t\r\n"):
        return None
    return v


def other_embed_src(value: str) -> Optional[str]:
    """Extract a safe iframe URL from a raw URL or an iframe snippet."""
    v = (value or "").strip()
    if not v:
        return None
    if v.startswith("<"):
        match = IFRAME_SRC_RE.search(v)
        if not match:
            return None
        v = html.unescape(match.group(2))
    return _https_url(v)


def embed_src(video: Video) -> Optional[str]:
    """Return the iframe URL for a video, or None when it cannot be embedded."""
    source = video.source
    if source == VideoSource.OTHER.value:
        return other_embed_src(video.id)
    template = PROVIDER_TEMPLATES.get(source)
    vid = (video.id or "").strip()
    if not template or not PROVIDER_ID_RE.fullmatch(vid):
        return None
    return template.format(id=vid)
