"""One-off migration: JSON file storage -> SQL storage (DATABASE_URL)."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the portfolio package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.core.config import get_settings  # noqa: E402
from portfolio.db.create_tables import create_all  # noqa: E402
from portfolio.repositories.json_storage import JsonFileStorage  # noqa: E402
from portfolio.repositories.sql_storage import SQLStorage  # noqa: E402


def migrate(data_dir: str, key: str) -> int:
    source = JsonFileStorage(data_dir, quota_bytes=None)
    raw = source.get_item(key)
    if raw is None:
        raise SystemExit(f"No stored document '{key}' under {data_dir}")
    create_all()
    # raw text, not re-parsed
    SQLStorage(quota_bytes=None).set_item(key, raw)
    return len(raw)


if __name__ == "__main__":
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy the portfolio document into the SQL backend")
    ap.add_argument("--data-dir", default=settings.data_dir)
    ap.add_argument("--key", default=settings.storage_key)
    args = ap.parse_args()
    size = migrate(args.data_dir, args.key)
    print(f"Document '{args.key}' migrated to SQL successfully ({size} bytes).")
