#!/usr/bin/env python3
"""
Create the collection files the API expects (one JSON array per collection).

Usage:
  python scripts/init_data.py [--data-dir ./data] [--force] [users products ...]
"""
from __future__ import annotations

import argparse
import sys

from flatrest.domain.collections import KNOWN_COLLECTIONS, is_valid_collection_name
from flatrest.repositories.json_storage import JsonFileStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Create empty collection files")
    ap.add_argument("names", nargs="*", help=f"Collections (default: {' '.join(KNOWN_COLLECTIONS)})")
    ap.add_argument("--data-dir", help="Target directory (default: DATA_DIR env or ./data)")
    ap.add_argument("--force", action="store_true", help="Overwrite existing files with []")
    args = ap.parse_args()

    store = JsonFileStore(args.data_dir)
    for name in args.names or KNOWN_COLLECTIONS:
        if not is_valid_collection_name(name):
            raise SystemExit(f"Invalid collection name: {name}")
        created = store.create_empty(name, overwrite=args.force)
        state = "created" if created else "exists, skipped"
        print(f"{store.path_for(name)}: {state}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
