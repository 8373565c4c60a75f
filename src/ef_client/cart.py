"""CartClient: local cart state kept in step with /api/v1/cart.

Without a session token nothing changes locally or remotely. Otherwise
mutations apply to the local items first, then sync with the server. A 2xx
response replaces the local items with the server's; a transport failure or
error status leaves the local change in place and is logged. ``refresh()``
always takes the server's items.
"""

import logging
from typing import Any

import httpx

from src.ef_client.session import LocalSessionCache, describe_failure

logger = logging.getLogger("ef.client")

CART_PATH = "/api/v1/cart"


class CartClient:
    def __init__(
        self,
        base_url: str,
        session: LocalSessionCache,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._session = session
        self._client = client or httpx.AsyncClient(base_url=base_url)
        self.items: list[dict[str, Any]] = []

    async def aclose(self) -> None:
        await self._client.aclose()

    def total_items(self) -> int:
        return sum(item["quantity"] for item in self.items)

    def total_price_cents(self) -> int:
        return sum(item["product"]["price_cents"] * item["quantity"] for item in self.items)

    def _find(self, product_id: str) -> dict[str, Any] | None:
        return next((i for i in self.items if i["product"]["id"] == product_id), None)

    def _signed_in(self, action: str) -> bool:
        if self._session.token() is None:
            logger.error("No session token, cart %s not applied", action)
            return False
        return True

    async def _sync(self, method: str, **kwargs: Any) -> bool:
        """Send one cart request; on success adopt the server's items."""
        token = self._session.token()
        if token is None:
            logger.error("No session token, cart %s not synced", method)
            return False
        headers = {"Authorization": f"Bearer {token}"}
        try:
            resp = await self._client.request(method, CART_PATH, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            logger.error("Cart %s failed: %s", method, exc)
            return False
        if not resp.is_success:
            logger.error("Cart %s rejected: %s", method, describe_failure(resp))
            return False
        self.items = resp.json()["data"]["items"]
        return True

    async def refresh(self) -> bool:
        """Replace local items with the server cart; local state is left alone on failure."""
        return await self._sync("GET")

    async def add(self, product: dict[str, Any], quantity: int = 1) -> bool:
        if quantity < 1:
            logger.error("Cart add of %s ignored: quantity %d", product["id"], quantity)
            return False
        if not self._signed_in("add"):
            return False
        existing = self._find(product["id"])
        if existing is not None:
            existing["quantity"] += quantity
        else:
            self.items.append({"id": product["id"], "product": product, "quantity": quantity})
        return await self._sync("POST", json={"product_id": product["id"], "quantity": quantity})

    async def remove(self, product_id: str) -> bool:
        if not self._signed_in("remove"):
            return False
        self.items = [i for i in self.items if i["product"]["id"] != product_id]
        return await self._sync("DELETE", params={"product_id": product_id})

    async def update_quantity(self, product_id: str, quantity: int) -> bool:
        if quantity <= 0:
            return await self.remove(product_id)
        if not self._signed_in("update"):
            return False
        existing = self._find(product_id)
        if existing is not None:
            existing["quantity"] = quantity
        return await self._sync("PUT", json={"product_id": product_id, "quantity": quantity})

    async def clear(self) -> None:
        """Remove every line one by one, as checkout does server-side."""
        for product_id in [i["product"]["id"] for i in self.items]:
            await self.remove(product_id)
