"""Helpers shared by the routers (service lookup, JSON bodies, error mapping)."""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from flatrest.services.collection_service import CollectionError, CollectionService

logger = logging.getLogger(__name__)


class PrettyJSONResponse(JSONResponse):
    """JSON body indented with two spaces."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def get_collection_service(request: Request) -> CollectionService:
    svc = getattr(getattr(request.app, "state", None), "collection_service", None)
    if not svc:
        raise RuntimeError("CollectionService not configured")
    return svc


async def read_json_object(request: Request) -> dict:
    """Parse the request body as a JSON object or fail with 400."""
    raw = await request.body()
    try:
        data = json.loads(raw or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(400, "Malformed JSON body")
    if not isinstance(data, dict):
        raise HTTPException(400, "JSON body must be an object")
    return data


RECORD_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_record_id(value: str) -> int | None:
    """Plain ASCII decimal ids only; no whitespace, underscores or other digits."""
    if not value or not RECORD_ID_PATTERN.fullmatch(value):
        return None
    return int(value)


def to_http_error(exc: CollectionError, *, not_found: str | None = None, unavailable: str | None = None) -> HTTPException:
    if exc.code == "not_found":
        logger.warning("%s", exc.message)
        return HTTPException(404, not_found or exc.message)
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.message, exc.__cause__ or exc)
        return HTTPException(exc.status_code, unavailable or exc.message)
    return HTTPException(exc.status_code, exc.message)
