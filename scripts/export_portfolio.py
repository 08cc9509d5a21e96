#!/usr/bin/env python3
"""
Print the stored portfolio document, or replace it from a JSON file.

Usage:
  python scripts/export_portfolio.py > backup.json
  python scripts/export_portfolio.py --import backup.json [--force]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Make the portfolio package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.core.config import get_settings  # noqa: E402
from portfolio.core.logging import setup_logging  # noqa: E402
from portfolio.domain.records import COLLECTIONS, RecordShapeError  # noqa: E402
from portfolio.repositories import build_storage  # noqa: E402
from portfolio.services.collection_store import CollectionStore  # noqa: E402


def _load_json(path: Path) -> dict:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a JSON object")
    return data


def export_document(store: CollectionStore) -> str:
    store.load()
    if store.load_error:
        raise SystemExit(f"Stored document is unreadable: {store.load_error}")
    return json.dumps(store.to_document(), ensure_ascii=False, indent=2)


def import_document(store: CollectionStore, data: dict, *, force: bool = False) -> dict[str, int]:
    """Replace all three collections; refuses to overwrite an unreadable document unless forced."""
    with store.editing():
        if store.load_error and not force:
            raise SystemExit(f"Stored document is unreadable ({store.load_error}); fix it or pass --force")
        for name in COLLECTIONS:
            try:
                store.replace(name, data.get(name) or [])
            except RecordShapeError as exc:
                raise SystemExit(f"Invalid import file: bad record in '{name}': {exc}") from exc
        return {name: len(store.items(name)) for name in COLLECTIONS}


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Export or import the portfolio document")
    ap.add_argument("--import", dest="import_path", help="JSON file replacing all three collections")
    ap.add_argument("--force", action="store_true", help="Import even when the stored document is unreadable")
    args = ap.parse_args(argv)

    setup_logging()
    settings = get_settings()
    store = CollectionStore(build_storage(settings), key=settings.storage_key)
    if args.import_path:
        counts = import_document(store, _load_json(Path(args.import_path)), force=args.force)
        print("OK: document imported")
        for name, count in counts.items():
            print(f"  {name}: {count}")
        return
    print(export_document(store))


if __name__ == "__main__":
    main()
