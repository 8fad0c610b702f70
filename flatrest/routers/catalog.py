from __future__ import annotations

from fastapi import APIRouter, Request

from flatrest.routers.deps import get_collection_service, to_http_error
from flatrest.services.collection_service import CollectionError

router = APIRouter(prefix="/api", tags=["catalog"])


def _list(request: Request, name: str):
    svc = get_collection_service(request)
    try:
        return svc.get_all(name)
    except CollectionError as exc:
        raise to_http_error(exc, unavailable=f"Error reading {name} data")


@router.get("/products")
def list_products(request: Request):
    return _list(request, "products")


@router.get("/orders")
def list_orders(request: Request):
    return _list(request, "orders")
