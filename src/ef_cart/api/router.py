"""ef_cart REST API: 4 endpoints, all require JWT authentication.

Every endpoint responds with the full cart so clients can replace their
local copy with server truth.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.ef_cart.application.schemas import (
    AddCartItemRequest,
    CartResponse,
    UpdateCartItemRequest,
)
from src.ef_cart.application.service import CartApplicationService
from src.ef_cart.domain.models import CartSnapshot
from src.ef_common.response import ApiResponse, respond
from src.ef_gateway.auth.dependencies import get_current_account_id
from src.ef_store.memory import InMemoryStore, get_store

router = APIRouter(prefix="/cart", tags=["cart"])

_service = CartApplicationService()


def _cart(request: Request, snapshot: CartSnapshot) -> ApiResponse:
    return respond(request, CartResponse.from_snapshot(snapshot).model_dump())


@router.get("")
async def get_cart(
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    return _cart(request, await _service.get_cart(store, account_id))


@router.post("")
async def add_item(
    request: Request,
    body: AddCartItemRequest,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    snapshot = await _service.add_item(store, account_id, body.product_id, body.quantity)
    return _cart(request, snapshot)


@router.put("")
async def update_quantity(
    request: Request,
    body: UpdateCartItemRequest,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    snapshot = await _service.update_quantity(store, account_id, body.product_id, body.quantity)
    return _cart(request, snapshot)


@router.delete("")
async def remove_item(
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
    product_id: str = Query(..., min_length=1),
) -> ApiResponse:
    return _cart(request, await _service.remove_item(store, account_id, product_id))
