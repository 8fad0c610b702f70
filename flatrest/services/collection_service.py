"""Read-modify-write use cases over file-backed collections."""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from flatrest.domain.collections import build_record, find_index, next_id
from flatrest.repositories.json_storage import JsonFileStore, ReadError, WriteError

logger = logging.getLogger(__name__)


class CollectionError(Exception):
    def __init__(self, message: str, code: str = "invalid", status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class RecordNotFound(CollectionError):
    """Raised when no record carries the requested id."""

    def __init__(self, name: str, record_id: Any) -> None:
        super().__init__(f"Record {record_id} not found in '{name}'", "not_found", 404)
        self.name = name
        self.record_id = record_id


class CollectionUnavailable(CollectionError):
    """Raised when the backing file cannot be read or written."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message, "unavailable", 500)
        self.name = name


class CollectionService:
    """get/create/update/delete for named collections stored by JsonFileStore."""

    def __init__(self, store: JsonFileStore | None = None) -> None:
        self.store = store or JsonFileStore()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, name: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.Lock()
            return lock

    def _load(self, name: str) -> list[dict]:
        try:
            return self.store.load(name)
        except ReadError as exc:
            raise CollectionUnavailable(name, f"Error reading {name} data") from exc

    def _save(self, name: str, records: list[dict]) -> None:
        try:
            self.store.save(name, records)
        except WriteError as exc:
            raise CollectionUnavailable(name, f"Error writing {name} data") from exc

    def get_all(self, name: str) -> list[dict]:
        return self._load(name)

    def get_by_id(self, name: str, record_id: int) -> dict:
        records = self._load(name)
        idx = find_index(records, record_id)
        if idx is None:
            raise RecordNotFound(name, record_id)
        return records[idx]

    def create(
        self,
        name: str,
        fields: Mapping[str, Any],
        defaults: Mapping[str, Any] | None = None,
    ) -> dict:
        """
        Append a new record with id = max(existing) + 1 and persist the collection.

        The record is returned only once the save succeeded.
        """
        with self._lock_for(name):
            records = self._load(name)
            record = build_record(fields, next_id(records), defaults)
            records.append(record)
            self._save(name, records)
        logger.info("Created %s record %s", name, record["id"])
        return record

    def update(self, name: str, record_id: int, fields: Mapping[str, Any]) -> dict:
        """Replace every caller field of an existing record, keeping its id."""
        with self._lock_for(name):
            records = self._load(name)
            idx = find_index(records, record_id)
            if idx is None:
                raise RecordNotFound(name, record_id)
            record = build_record(fields, record_id)
            records[idx] = record
            self._save(name, records)
        logger.info("Updated %s record %s", name, record_id)
        return record

    def delete(self, name: str, record_id: int) -> dict:
        with self._lock_for(name):
            records = self._load(name)
            idx = find_index(records, record_id)
            if idx is None:
                raise RecordNotFound(name, record_id)
            removed = records.pop(idx)
            self._save(name, records)
        logger.info("Deleted %s record %s", name, record_id)
        return removed
