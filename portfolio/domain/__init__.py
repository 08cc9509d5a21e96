"""Domain types (records and collection names)."""

from .records import (
    COLLECTIONS,
    RECORD_TYPES,
    Article,
    Photo,
    RecordShapeError,
    Video,
    VideoSource,
)

__all__ = [
    "COLLECTIONS",
    "RECORD_TYPES",
    "Article",
    "Photo",
    "RecordShapeError",
    "Video",
    "VideoSource",
]
