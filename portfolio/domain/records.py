"""Record types stored in the portfolio document.

Each collection is an ordered list of one record type. Records carry no
behaviour beyond converting to and from the plain dicts kept in the persisted
JSON document; ``from_dict`` checks shape only (known fields must be strings,
missing fields default to an empty string).
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping


class RecordShapeError(ValueError):
    """Raised when a mapping cannot be turned into a record."""


class VideoSource(str, Enum):
    VIMEO = "vimeo"
    YOUTUBE = "youtube"
    GOOGLEDRIVE = "googledrive"
    OTHER = "other"


def _text(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RecordShapeError(f"field '{name}' must be a string, got {type(value).__name__}")
    return value


class _Record:
    """Shared dict conversion for the dataclass records below."""

    uid: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        if not isinstance(data, Mapping):
            raise RecordShapeError(f"{cls.__name__} must be an object, got {type(data).__name__}")
        return cls(**{f.name: _text(data, f.name) for f in fields(cls)})

    def to_dict(self) -> dict:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            # uid is only written once assigned, so older documents keep their layout
            if f.name == "uid" and not value:
                continue
            out[f.name] = value
        return out


@dataclass
class Article(_Record):
    title: str = ""
    outlet: str = ""
    date: str = ""
    url: str = ""
    description: str = ""
    uid: str = ""


@dataclass
class Photo(_Record):
    title: str = ""
    caption: str = ""
    thumbnail: str = ""
    full: str = ""
    location: str = ""
    uid: str = ""


@dataclass
class Video(_Record):
    title: str = ""
    source: str = VideoSource.OTHER.value
    id: str = ""
    description: str = ""
    uid: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.source, VideoSource):
            self.source = self.source.value
        valid = {s.value for s in VideoSource}
        if self.source not in valid:
            raise RecordShapeError(
                f"video source must be one of {', '.join(sorted(valid))}, got '{self.source}'"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Video":
        if isinstance(data, Mapping) and not data.get("source"):
            raise RecordShapeError("video source is required")
        return super().from_dict(data)


RECORD_TYPES: dict[str, type] = {
    "articles": Article,
    "photos": Photo,
    "videos": Video,
}

COLLECTIONS: tuple[str, ...] = tuple(RECORD_TYPES)
