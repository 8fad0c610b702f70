"""
Configuration helpers for the flatrest service.

Routers/services read settings through get_settings() instead of touching
os.environ directly, so tests can swap the environment and clear the cache.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_url: str
    port: int
    data_dir: Path
    json_indent: int
    default_role: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    data_dir = (os.getenv("DATA_DIR") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_url=os.getenv("URL", "http://localhost").rstrip("/"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
        json_indent=max(0, _int(os.getenv("JSON_INDENT", "4"), 4)),
        default_role=os.getenv("DEFAULT_ROLE") or "peasant",
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
