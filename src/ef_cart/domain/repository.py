"""Cart repository Protocol: the store calls the cart service relies on."""

from datetime import datetime
from typing import Protocol

from src.ef_cart.domain.models import CartLine
from src.ef_catalog.domain.models import Listing


class CartRepositoryProtocol(Protocol):
    async def get_listing(self, listing_id: str) -> Listing | None: ...

    async def add_cart_quantity(
        self,
        account_id: str,
        listing_id: str,
        quantity: int,
        added_at: datetime | None = None,
    ) -> CartLine: ...

    async def get_cart_lines(self, account_id: str) -> list[CartLine]: ...

    async def set_cart_quantity(self, account_id: str, listing_id: str, quantity: int) -> bool: ...

    async def delete_cart_line(self, account_id: str, listing_id: str) -> bool: ...
