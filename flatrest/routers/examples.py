"""
Request-echo endpoints: no persistence, they only show what the server received.

The catch-all ``/{api}/{route}/{variable}`` route must be included after every
other router so it does not shadow real three-segment paths.
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from flatrest.routers.deps import read_json_object

router = APIRouter(tags=["examples"])
logger = logging.getLogger(__name__)


@router.get("/get", response_class=PlainTextResponse)
def get_hint():
    return "GET request received. You can now test /users"


@router.post("/api/postExample", response_class=PlainTextResponse)
async def post_example(request: Request):
    data = await read_json_object(request)
    return f"POST request received with data: {json.dumps(data)}"


@router.put("/api/putExample/{item_id}", response_class=PlainTextResponse)
async def put_example(item_id: str, request: Request):
    data = await read_json_object(request)
    return f"PUT request received for ID {item_id} with data: {json.dumps(data)}"


@router.delete("/api/deleteExample/{item_id}", response_class=PlainTextResponse)
def delete_example(item_id: str):
    return f"DELETE request received for ID {item_id}"


@router.get("/{api}/{route}/{variable}", response_class=PlainTextResponse)
def echo_params(api: str, route: str, variable: str):
    message = f"GET request, req.params are {api} {route} {variable}"
    logger.info(message)
    return message
