from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Make the portfolio package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.services.uploads import (  # noqa: E402
    UploadError,
    discard_photo,
    has_valid_signature,
    store_photo,
)


def _jpeg(size=(3000, 1500)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, (10, 80, 160)).save(buffer, format="JPEG")
    return buffer.getvalue()


def test_signature_check():
    assert has_valid_signature(_jpeg((10, 10)), "image/jpeg")
    assert not has_valid_signature(_jpeg((10, 10)), "image/png")
    assert not has_valid_signature(b"GIF89a", "image/gif")


def test_store_photo_limits_both_sizes(tmp_path):
    stored = store_photo(_jpeg(), "image/jpeg", str(tmp_path), max_bytes=5 * 1024 * 1024)
    full_name = stored.full.split("/")[-1].split("?")[0]
    thumb_name = stored.thumbnail.split("/")[-1].split("?")[0]
    with Image.open(tmp_path / full_name) as img:
        assert img.size == (2000, 1000)
    with Image.open(tmp_path / thumb_name) as img:
        assert img.size == (600, 300)


def test_store_photo_rejects_large_and_empty_files(tmp_path):
    with pytest.raises(UploadError):
        store_photo(_jpeg(), "image/jpeg", str(tmp_path), max_bytes=100)
    with pytest.raises(UploadError):
        store_photo(b"", "image/jpeg", str(tmp_path), max_bytes=100)
    assert list(tmp_path.iterdir()) == []


def test_discard_photo_removes_both_files(tmp_path):
    keep = tmp_path / "other.jpg"
    keep.write_bytes(b"unrelated")
    stored = store_photo(_jpeg((50, 50)), "image/jpeg", str(tmp_path), max_bytes=1024 * 1024)
    discard_photo(stored, str(tmp_path))
    assert list(tmp_path.iterdir()) == [keep]
    discard_photo(stored, str(tmp_path))
