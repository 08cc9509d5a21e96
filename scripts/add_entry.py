#!/usr/bin/env python3
"""
Add one entry to the portfolio in the configured storage.

Usage:
  python scripts/add_entry.py article --title "A" --outlet "B" --date 2024-01-01 --url https://x
  python scripts/add_entry.py photo --title "Dunes" --full https://img/full.jpg [--thumbnail ...]
  python scripts/add_entry.py video --title "Talk" --source youtube --id dQw4w9WgXcQ
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the portfolio package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.core.config import get_settings  # noqa: E402
from portfolio.core.logging import setup_logging  # noqa: E402
from portfolio.domain.records import Article, Photo, Video, VideoSource  # noqa: E402
from portfolio.repositories import build_storage  # noqa: E402
from portfolio.services.collection_store import CollectionStore  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Add an article, photo or video")
    sub = ap.add_subparsers(dest="kind", required=True)

    art = sub.add_parser("article", help="Add an article")
    art.add_argument("--title", required=True)
    art.add_argument("--outlet", default="")
    art.add_argument("--date", default="", help="YYYY-MM-DD")
    art.add_argument("--url", default="")
    art.add_argument("--description", default="")

    pho = sub.add_parser("photo", help="Add a photo by URL")
    pho.add_argument("--title", required=True)
    pho.add_argument("--caption", default="")
    pho.add_argument("--full", required=True, help="Full-size image URL")
    pho.add_argument("--thumbnail", default="", help="Thumbnail URL (default: same as --full)")
    pho.add_argument("--location", default="")

    vid = sub.add_parser("video", help="Add a video")
    vid.add_argument("--title", required=True)
    vid.add_argument("--source", required=True, choices=[s.value for s in VideoSource])
    vid.add_argument("--id", required=True, help="Provider video id, or https embed URL for 'other'")
    vid.add_argument("--description", default="")
    return ap


def record_from_args(args: argparse.Namespace):
    if args.kind == "article":
        return "articles", Article(
            title=args.title, outlet=args.outlet, date=args.date, url=args.url, description=args.description
        )
    if args.kind == "photo":
        return "photos", Photo(
            title=args.title,
            caption=args.caption,
            thumbnail=args.thumbnail or args.full,
            full=args.full,
            location=args.location,
        )
    return "videos", Video(title=args.title, source=args.source, id=args.id, description=args.description)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging()
    settings = get_settings()
    store = CollectionStore(build_storage(settings), key=settings.storage_key)
    collection, record = record_from_args(args)
    with store.editing():
        if store.load_error:
            raise SystemExit(f"Stored document is unreadable ({store.load_error}); fix or export it first")
        store.append(collection, record)
        size = len(store.items(collection))
    print(f"OK: added to {collection} (now {size})")
    print(f"  Title: {record.title}")
    print(f"  UID: {record.uid}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
