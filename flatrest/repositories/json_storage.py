"""
JSON file persistence adapter.

Each collection lives in its own ``<data_dir>/<name>.json`` file holding a
top-level array of objects. Loads and saves always cover the whole file.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
import os

from flatrest.core.config import get_settings
from flatrest.domain.collections import ensure_collection_name

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for collection file access."""

    def __init__(self, name: str, path: Path, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.path = path
        self.message = message


class ReadError(StorageError):
    """Raised when a collection file is missing, unreadable or not a JSON array."""


class WriteError(StorageError):
    """Raised when a collection file cannot be written."""


class JsonFileStore:
    """Load/save whole collections as pretty-printed JSON arrays."""

    def __init__(self, data_dir: Path | str | None = None, indent: int | None = None) -> None:
        settings = get_settings()
        self.data_dir = Path(data_dir) if data_dir is not None else settings.data_dir
        self.indent = settings.json_indent if indent is None else indent

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{ensure_collection_name(name)}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str) -> list[dict]:
        path = self.path_for(name)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            logger.error("Collection file missing: %s", path)
            raise ReadError(name, path, f"Collection '{name}' not found at {path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading file %s: %s", path, exc)
            raise ReadError(name, path, f"Could not read collection '{name}': {exc}") from exc
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON in %s: %s", path, exc)
            raise ReadError(name, path, f"Collection '{name}' is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            logger.error("Collection file %s does not hold a JSON array", path)
            raise ReadError(name, path, f"Collection '{name}' must be a JSON array")
        if not all(isinstance(record, dict) for record in data):
            logger.error("Collection file %s holds non-object entries", path)
            raise ReadError(name, path, f"Collection '{name}' must be a JSON array of objects")
        return data

    def save(self, name: str, records: list[dict]) -> None:
        """Replace the collection file; the previous content survives a failed write."""
        path = self.path_for(name)
        tmp = path.with_name(path.name + ".tmp")
        try:
            payload = json.dumps(list(records), ensure_ascii=False, indent=self.indent)
            tmp.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error writing file %s: %s", path, exc)
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                pass
            raise WriteError(name, path, f"Could not write collection '{name}': {exc}") from exc
        logger.debug("Saved %d records to %s", len(records), path)

    def create_empty(self, name: str, *, overwrite: bool = False) -> bool:
        """Create ``[]`` for a collection; returns False when it already exists."""
        if self.exists(name) and not overwrite:
            return False
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.save(name, [])
        return True
