"""Single-user portfolio of articles, photos and videos."""

__version__ = "0.1.0"
