"""CartApplicationService: per-account cart lines joined with live listings.

Every method is scoped to one account id taken from the bearer token; there
is no way to read or change another account's cart through this service.
"""

import logging

from src.ef_cart.domain.models import CartItem, CartSnapshot
from src.ef_cart.domain.repository import CartRepositoryProtocol
from src.ef_common.errors import InvalidQuantityError, ListingNotFoundError

logger = logging.getLogger("ef.cart")


class CartApplicationService:
    async def get_cart(self, store: CartRepositoryProtocol, account_id: str) -> CartSnapshot:
        """Join each line with its current listing; lines whose listing is gone are skipped."""
        items: list[CartItem] = []
        for line in await store.get_cart_lines(account_id):
            listing = await store.get_listing(line.listing_id)
            if listing is None:
                logger.debug("Skipping cart line for deleted listing %s", line.listing_id)
                continue
            items.append(CartItem(line=line, listing=listing))
        return CartSnapshot(items=items)

    async def add_item(
        self,
        store: CartRepositoryProtocol,
        account_id: str,
        listing_id: str,
        quantity: int = 1,
    ) -> CartSnapshot:
        if quantity < 1:
            raise InvalidQuantityError(quantity)
        if await store.get_listing(listing_id) is None:
            raise ListingNotFoundError(listing_id)
        await store.add_cart_quantity(account_id, listing_id, quantity)
        return await self.get_cart(store, account_id)

    async def update_quantity(
        self,
        store: CartRepositoryProtocol,
        account_id: str,
        listing_id: str,
        quantity: int,
    ) -> CartSnapshot:
        """Set the quantity exactly; zero or less removes the line. Missing lines stay missing."""
        if quantity <= 0:
            return await self.remove_item(store, account_id, listing_id)
        await store.set_cart_quantity(account_id, listing_id, quantity)
        return await self.get_cart(store, account_id)

    async def remove_item(
        self, store: CartRepositoryProtocol, account_id: str, listing_id: str
    ) -> CartSnapshot:
        await store.delete_cart_line(account_id, listing_id)
        return await self.get_cart(store, account_id)

    async def clear(self, store: CartRepositoryProtocol, account_id: str) -> int:
        """Remove every line, including dangling ones. Returns the number removed."""
        removed = 0
        for line in await store.get_cart_lines(account_id):
            if await store.delete_cart_line(account_id, line.listing_id):
                removed += 1
        return removed
