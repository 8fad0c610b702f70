"""Logging setup and the per-request access log middleware."""
from __future__ import annotations

import logging
import sys
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware

ROOT_LOGGER = "flatrest"
access_logger = logging.getLogger("flatrest.access")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    if not any(getattr(h, "_flatrest", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        handler._flatrest = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    def __init__(self, app, *, skip_paths: tuple[str, ...] = ("/health",)) -> None:
        super().__init__(app)
        self._skip_paths = set(skip_paths)

    async def dispatch(self, request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            access_logger.error(
                "[%s] %s %s failed: %s (%.2fms)",
                request_id,
                request.method,
                request.url.path,
                type(exc).__name__,
                duration_ms,
            )
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        if request.url.path not in self._skip_paths:
            access_logger.info(
                "[%s] %s %s %s (%.2fms)",
                request_id,
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        response.headers.setdefault("X-Request-ID", request_id)
        return response
