"""Domain helpers for collection names, id allocation and record building."""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

COLLECTION_NAME_PATTERN = re.compile(r"[a-z][a-z0-9_-]{0,63}")
KNOWN_COLLECTIONS = ("users", "products", "orders")
ID_FIELD = "id"


class InvalidCollectionName(ValueError):
    """Raised when a collection name cannot be mapped to a backing file."""


def is_valid_collection_name(value: str | None) -> bool:
    """Return True when name matches the allowed pattern."""
    if not value:
        return False
    return bool(COLLECTION_NAME_PATTERN.fullmatch(value))


def ensure_collection_name(value: str | None) -> str:
    if not is_valid_collection_name(value):
        raise InvalidCollectionName(f"Invalid collection name: {value!r}")
    return value  # type: ignore[return-value]


def _record_id(record: Any) -> int | None:
    if not isinstance(record, Mapping):
        return None
    value = record.get(ID_FIELD)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def next_id(records: Iterable[Mapping[str, Any]]) -> int:
    """Return max(existing ids) + 1, or 1 when there is no usable id."""
    ids = [rid for rid in (_record_id(r) for r in records) if rid is not None]
    return max(ids) + 1 if ids else 1


def find_index(records: list[dict], record_id: int) -> int | None:
    """Index of the first record whose id equals record_id."""
    for idx, record in enumerate(records):
        if _record_id(record) == record_id:
            return idx
    return None


def build_record(
    fields: Mapping[str, Any],
    record_id: int,
    defaults: Mapping[str, Any] | None = None,
) -> dict:
    """
    The id first, then caller fields (any caller id dropped), then defaults
    for absent fields.

    A field explicitly set to None counts as absent.
    """
    record = {ID_FIELD: record_id, **{k: v for k, v in fields.items() if k != ID_FIELD}}
    for key, value in (defaults or {}).items():
        if record.get(key) is None:
            record[key] = value
    return record
