"""Create (or recreate) the storage table for the SQL backend.

Usage:
  DATABASE_URL=sqlite:///portfolio.db python -m portfolio.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers StorageItem on Base.metadata


def create_all(drop: bool = False) -> None:
    engine = get_engine()
    if drop:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Create the storage_items table")
    ap.add_argument("--drop", action="store_true", help="Drop the table first (erases stored documents)")
    args = ap.parse_args()
    try:
        create_all(drop=args.drop)
        print("storage_items table ready.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
