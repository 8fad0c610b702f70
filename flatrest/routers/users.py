from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from flatrest.core.config import get_settings
from flatrest.routers.deps import (
    PrettyJSONResponse,
    get_collection_service,
    parse_record_id,
    read_json_object,
    to_http_error,
)
from flatrest.services.collection_service import CollectionError

router = APIRouter(tags=["users"])

COLLECTION = "users"
READ_ERROR = "Error reading users data"
NOT_FOUND = "User not found"


def _user_defaults(request: Request) -> dict:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return {"role": settings.default_role}


def _user_id_or_404(user_id: str) -> int:
    parsed = parse_record_id(user_id)
    if parsed is None:
        raise HTTPException(404, NOT_FOUND)
    return parsed


@router.get("/users")
def list_users(request: Request):
    svc = get_collection_service(request)
    try:
        return svc.get_all(COLLECTION)
    except CollectionError as exc:
        raise to_http_error(exc, unavailable=READ_ERROR)


@router.get("/prettyusers", response_class=PrettyJSONResponse)
def list_users_pretty(request: Request):
    svc = get_collection_service(request)
    try:
        users = svc.get_all(COLLECTION)
    except CollectionError as exc:
        raise to_http_error(exc, unavailable="Error reading Pretty users data")
    return PrettyJSONResponse(users)


@router.post("/users", status_code=201)
async def create_user(request: Request):
    body = await read_json_object(request)
    svc = get_collection_service(request)
    try:
        return await run_in_threadpool(svc.create, COLLECTION, body, _user_defaults(request))
    except CollectionError as exc:
        raise to_http_error(exc, unavailable="Error processing request")


@router.get("/api/users/{user_id}")
def get_user(user_id: str, request: Request):
    record_id = _user_id_or_404(user_id)
    svc = get_collection_service(request)
    try:
        return svc.get_by_id(COLLECTION, record_id)
    except CollectionError as exc:
        raise to_http_error(exc, not_found=NOT_FOUND, unavailable=READ_ERROR)


@router.put("/api/users/{user_id}")
async def replace_user(user_id: str, request: Request):
    record_id = _user_id_or_404(user_id)
    body = await read_json_object(request)
    svc = get_collection_service(request)
    try:
        return await run_in_threadpool(svc.update, COLLECTION, record_id, body)
    except CollectionError as exc:
        raise to_http_error(exc, not_found=NOT_FOUND, unavailable="Error processing request")


@router.delete("/api/users/{user_id}")
def delete_user(user_id: str, request: Request):
    record_id = _user_id_or_404(user_id)
    svc = get_collection_service(request)
    try:
        return svc.delete(COLLECTION, record_id)
    except CollectionError as exc:
        raise to_http_error(exc, not_found=NOT_FOUND, unavailable="Error processing request")
