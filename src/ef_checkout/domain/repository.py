"""Order repository Protocol.

Checkout reads and clears the cart, so it needs the cart calls as well.
"""

from typing import Protocol

from src.ef_cart.domain.repository import CartRepositoryProtocol
from src.ef_checkout.domain.models import Order


class CheckoutRepositoryProtocol(CartRepositoryProtocol, Protocol):
    async def save_order(self, order: Order) -> Order: ...

    async def get_order(self, order_id: str) -> Order | None: ...

    async def list_orders(self, account_id: str) -> list[Order]: ...
