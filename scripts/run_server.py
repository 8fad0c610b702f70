#!/usr/bin/env python3
"""
Start the flatrest API with uvicorn.

Usage:
  python scripts/run_server.py [--host 0.0.0.0] [--port 3000] [--reload]

The port falls back to the PORT env var (default 3000).
"""
from __future__ import annotations

import argparse
import logging

import uvicorn

from flatrest.core.config import get_settings
from flatrest.core.logging import configure_logging


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Run the flatrest HTTP server")
    ap.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    ap.add_argument("--port", type=int, default=settings.port, help="Port (default: PORT env or 3000)")
    ap.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = ap.parse_args()

    logger = configure_logging(settings.log_level)
    logger.info("Server running on %s:%s", settings.public_url, args.port)
    uvicorn.run(
        "flatrest.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=logging.getLevelName(logger.level).lower(),
    )


if __name__ == "__main__":
    main()
