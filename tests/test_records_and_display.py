from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the portfolio package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.domain.records import Article, Photo, RecordShapeError, Video, VideoSource  # noqa: E402
from portfolio.services import display  # noqa: E402
from portfolio.services.embeds import embed_src, other_embed_src  # noqa: E402


def test_optional_fields_default_to_empty():
    article = Article.from_dict({"title": "A", "outlet": "B", "date": "2024-01-01", "url": "http://x"})
    assert article.description == ""
    photo = Photo.from_dict({"title": "P", "caption": "C", "thumbnail": "t", "full": "f"})
    assert photo.location == ""
    assert "uid" not in photo.to_dict()


def test_uid_is_serialized_once_assigned():
    video = Video(title="v", source=VideoSource.YOUTUBE, id="abc", description="", uid="u1")
    assert video.source == "youtube"
    assert video.to_dict() == {"title": "v", "source": "youtube", "id": "abc", "description": "", "uid": "u1"}


def test_video_source_is_checked():
    with pytest.raises(RecordShapeError):
        Video(title="v", source="dailymotion", id="x")
    with pytest.raises(RecordShapeError):
        Video.from_dict({"title": "v", "id": "x", "description": ""})


def test_non_string_field_is_a_shape_error():
    with pytest.raises(RecordShapeError):
        Article.from_dict({"title": ["list"]})
    with pytest.raises(RecordShapeError):
        Article.from_dict("not a mapping")


@pytest.mark.parametrize(
    "source, vid, expected",
    [
        ("vimeo", "76979871", "https://player.vimeo.com/video/76979871"),
        ("youtube", "dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
        ("googledrive", "1AbC_d-E", "https://drive.google.com/file/d/1AbC_d-E/preview"),
        ("youtube", "abc\"><script>", None),
        ("vimeo", "", None),
    ],
)
def test_provider_embeds(source, vid, expected):
    assert embed_src(Video(title="t", source=source, id=vid)) == expected


def test_other_source_accepts_https_url_or_iframe_src():
    assert other_embed_src("https://player.example.com/e/1") == "https://player.example.com/e/1"
    snippet = '<iframe width="560" src="https://player.example.com/e/2?a=1&amp;b=2" onload="alert(1)"></iframe>'
    assert other_embed_src(snippet) == "https://player.example.com/e/2?a=1&b=2"


@pytest.mark.parametrize(
    "raw",
    [
        "<script>alert(1)</script>",
        "http://insecure.example.com/embed",
        "javascript:alert(1)",
        '<iframe src="javascript:alert(1)"></iframe>',
        "",
    ],
)
def test_other_source_rejects_everything_else(raw):
    assert other_embed_src(raw) is None
    assert embed_src(Video(title="t", source="other", id=raw)) is None


def test_date_formats():
    assert display.format_long_date("2024-01-05") == "January 5, 2024"
    assert display.format_short_date("2024-01-05") == "Jan 2024"
    assert display.format_long_date("2023-11-30T10:00:00Z") == "November 30, 2023"
    assert display.format_long_date("sometime in May") == "sometime in May"
    assert display.format_long_date("") == ""


def test_truncate_and_featured():
    assert display.truncate("short") == "short"
    assert display.truncate("x" * 100) == "x" * 80 + "..."
    assert display.featured([1, 2, 3, 4, 5], 3) == [1, 2, 3]
    assert display.featured([1], 3) == [1]


def test_lightbox_neighbors_wrap():
    assert display.lightbox_neighbors(0, 3) == (2, 1)
    assert display.lightbox_neighbors(2, 3) == (1, 0)
    assert display.lightbox_neighbors(0, 1) == (0, 0)
    with pytest.raises(ValueError):
        display.lightbox_neighbors(0, 0)


def test_link_and_image_guards():
    assert display.safe_href("https://example.com/a") == "https://example.com/a"
    assert display.safe_href("javascript:alert(1)") == "#"
    assert display.safe_href("") == "#"
    assert display.safe_image_src("/static/uploads/a.jpg") == "/static/uploads/a.jpg"
    assert display.safe_image_src("data:image/png;base64,AAAA") == "data:image/png;base64,AAAA"
    assert display.safe_image_src("data:image/svg+xml,<svg onload=x>") == ""
    assert display.safe_image_src("javascript:alert(1)") == ""
