# src/ef_checkout/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.ef_checkout.application.schemas import (
    CheckoutRequest,
    OrderListResponse,
    OrderOut,
    QuoteResponse,
)
from src.ef_checkout.application.service import CheckoutApplicationService
from src.ef_checkout.domain.wallet import WalletProviderProtocol
from src.ef_checkout.infrastructure.wallet_providers import get_wallet
from src.ef_common.response import ApiResponse, respond
from src.ef_gateway.auth.dependencies import get_current_account_id
from src.ef_store.memory import InMemoryStore, get_store

checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
orders_router = APIRouter(prefix="/orders", tags=["orders"])

_service = CheckoutApplicationService()


@checkout_router.get("/quote")
async def get_quote(
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    total_items, pricing, amount_wei = await _service.quote(store, account_id)
    quote = QuoteResponse.build(total_items, pricing, _service.eth_price_cents, amount_wei)
    return respond(request, quote.model_dump())


@checkout_router.post("", status_code=201)
async def place_order(
    request: Request,
    body: CheckoutRequest,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
    wallet: Annotated[WalletProviderProtocol, Depends(get_wallet)],
) -> ApiResponse:
    order = await _service.checkout(store, wallet, account_id, body)
    return respond(request, {"order": OrderOut.from_domain(order).model_dump()}, "Order placed")


@orders_router.get("")
async def list_orders(
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    orders = await _service.list_orders(store, account_id)
    resp = OrderListResponse(orders=[OrderOut.from_domain(o) for o in orders])
    return respond(request, resp.model_dump())


@orders_router.get("/{order_id}")
async def get_order(
    order_id: str,
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    order = await _service.get_order(store, account_id, order_id)
    return respond(request, {"order": OrderOut.from_domain(order).model_dump()})
