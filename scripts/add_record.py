#!/usr/bin/env python3
"""
Append a record to a collection file, the same way POST /users does.

Usage:
  python scripts/add_record.py users --field name="John Doe" --field email=john@example.com
  python scripts/add_record.py products --json '{"name": "Lamp", "price": 12.5}'
"""
from __future__ import annotations

import argparse
import json
import sys

from flatrest.core.config import get_settings
from flatrest.services.collection_service import CollectionService


def parse_fields(pairs: list[str]) -> dict:
    fields: dict = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise SystemExit(f"Invalid --field '{pair}' (expected key=value)")
        try:
            fields[key] = json.loads(value)
        except json.JSONDecodeError:
            fields[key] = value
    return fields


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a record to a collection")
    ap.add_argument("collection", help="Collection name (ex.: users)")
    ap.add_argument("--field", action="append", default=[], help="key=value (value parsed as JSON when possible)")
    ap.add_argument("--json", dest="raw", help="Full JSON object with the record fields")
    args = ap.parse_args()

    fields: dict = {}
    if args.raw:
        fields = json.loads(args.raw)
        if not isinstance(fields, dict):
            raise SystemExit("--json must be an object")
    fields.update(parse_fields(args.field))

    defaults = {"role": get_settings().default_role} if args.collection == "users" else None
    record = CollectionService().create(args.collection, fields, defaults)
    print("OK: record created")
    print(json.dumps(record, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
