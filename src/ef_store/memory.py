"""In-process entity store for accounts, listings, cart lines and orders.

Plain dicts keyed by generated id (cart lines by ``account_id::listing_id``).
No persistence, no cross-entity transactions: each call is atomic for a
single row only, and concurrent writers are last-writer-wins.

Every read hands back a deep copy, so a caller can only change a stored row
through an update call. Update is a partial field merge that returns False
when the row is missing; delete is idempotent and returns whether a row
existed.

The store is created once by the application lifespan (``src/main.py``) and
reached from handlers through ``Depends(get_store)``.
"""

import copy
import dataclasses
from datetime import datetime
from typing import Any, TypeVar

from fastapi import Request

from src.ef_cart.domain.models import CartLine
from src.ef_catalog.domain.models import Listing
from src.ef_checkout.domain.models import Order
from src.ef_common.datetime_utils import utc_now
from src.ef_common.errors import EmailExistsError
from src.ef_common.id_generator import cart_line_key
from src.ef_gateway.account.models import Account

T = TypeVar("T")

# Fields no partial update may touch.
_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def _merge(row: T, updates: dict[str, Any]) -> T:
    """Return a copy of ``row`` with ``updates`` applied; unknown fields rejected."""
    known = {f.name for f in dataclasses.fields(row)}  # type: ignore[arg-type]
    unknown = set(updates) - known
    if unknown:
        raise ValueError(f"Unknown fields for {type(row).__name__}: {sorted(unknown)}")
    frozen = _IMMUTABLE_FIELDS & set(updates)
    if frozen:
        raise ValueError(f"Fields cannot be updated: {sorted(frozen)}")
    return dataclasses.replace(row, **copy.deepcopy(updates))  # type: ignore[type-var]


class InMemoryStore:
    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._email_index: dict[str, str] = {}  # lower-cased email -> account id
        self._listings: dict[str, Listing] = {}
        self._cart_lines: dict[str, CartLine] = {}
        self._orders: dict[str, Order] = {}
        self._order_history: dict[str, list[str]] = {}  # account id -> order ids

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    async def create_account(self, account: Account) -> Account:
        """Insert a new account. Raises EmailExistsError on a duplicate email."""
        email_key = account.email.lower()
        if email_key in self._email_index:
            raise EmailExistsError()
        if account.created_at is None:
            account = dataclasses.replace(account, created_at=utc_now())
        self._accounts[account.id] = copy.deepcopy(account)
        self._email_index[email_key] = account.id
        return copy.deepcopy(account)

    async def get_account(self, account_id: str) -> Account | None:
        account = self._accounts.get(account_id)
        return copy.deepcopy(account) if account else None

    async def get_account_by_email(self, email: str) -> Account | None:
        account_id = self._email_index.get(email.lower())
        return await self.get_account(account_id) if account_id else None

    async def update_account(self, account_id: str, **updates: Any) -> bool:
        current = self._accounts.get(account_id)
        if current is None:
            return False
        merged = _merge(current, updates)
        old_key, new_key = current.email.lower(), merged.email.lower()
        if new_key != old_key:
            owner = self._email_index.get(new_key)
            if owner is not None and owner != account_id:
                raise EmailExistsError()
            del self._email_index[old_key]
            self._email_index[new_key] = account_id
        self._accounts[account_id] = merged
        return True

    async def delete_account(self, account_id: str) -> bool:
        account = self._accounts.pop(account_id, None)
        if account is None:
            return False
        self._email_index.pop(account.email.lower(), None)
        return True

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def create_listing(self, listing: Listing) -> Listing:
        if listing.created_at is None:
            listing = dataclasses.replace(listing, created_at=utc_now())
        self._listings[listing.id] = copy.deepcopy(listing)
        return copy.deepcopy(listing)

    async def get_listing(self, listing_id: str) -> Listing | None:
        listing = self._listings.get(listing_id)
        return copy.deepcopy(listing) if listing else None

    async def list_listings(self) -> list[Listing]:
        """All listings in insertion order."""
        return [copy.deepcopy(lst) for lst in self._listings.values()]

    async def list_listings_by_seller(self, seller_id: str) -> list[Listing]:
        return [
            copy.deepcopy(lst) for lst in self._listings.values() if lst.seller_id == seller_id
        ]

    async def update_listing(self, listing_id: str, **updates: Any) -> bool:
        current = self._listings.get(listing_id)
        if current is None:
            return False
        self._listings[listing_id] = _merge(current, updates)
        return True

    async def delete_listing(self, listing_id: str) -> bool:
        # Cart lines referencing the listing are left alone; snapshots drop them.
        return self._listings.pop(listing_id, None) is not None

    # ------------------------------------------------------------------
    # Cart lines
    # ------------------------------------------------------------------

    async def add_cart_quantity(
        self,
        account_id: str,
        listing_id: str,
        quantity: int,
        added_at: datetime | None = None,
    ) -> CartLine:
        """Increment an existing line, or create it with ``quantity``."""
        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")
        key = cart_line_key(account_id, listing_id)
        line = self._cart_lines.get(key)
        if line is not None:
            line = dataclasses.replace(line, quantity=line.quantity + quantity)
        else:
            line = CartLine(
                account_id=account_id,
                listing_id=listing_id,
                quantity=quantity,
                added_at=added_at or utc_now(),
            )
        self._cart_lines[key] = line
        return copy.deepcopy(line)

    async def get_cart_lines(self, account_id: str) -> list[CartLine]:
        return [
            copy.deepcopy(line)
            for line in self._cart_lines.values()
            if line.account_id == account_id
        ]

    async def set_cart_quantity(self, account_id: str, listing_id: str, quantity: int) -> bool:
        """Set a line's quantity exactly; quantity <= 0 deletes the line.

        Returns False when no line exists (nothing is created).
        """
        key = cart_line_key(account_id, listing_id)
        line = self._cart_lines.get(key)
        if line is None:
            return False
        if quantity <= 0:
            del self._cart_lines[key]
        else:
            self._cart_lines[key] = dataclasses.replace(line, quantity=quantity)
        return True

    async def delete_cart_line(self, account_id: str, listing_id: str) -> bool:
        return self._cart_lines.pop(cart_line_key(account_id, listing_id), None) is not None

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def save_order(self, order: Order) -> Order:
        self._orders[order.id] = copy.deepcopy(order)
        self._order_history.setdefault(order.account_id, []).append(order.id)
        return copy.deepcopy(order)

    async def get_order(self, order_id: str) -> Order | None:
        order = self._orders.get(order_id)
        return copy.deepcopy(order) if order else None

    async def list_orders(self, account_id: str) -> list[Order]:
        """Order history for one account, newest first."""
        ids = self._order_history.get(account_id, [])
        return [copy.deepcopy(self._orders[oid]) for oid in reversed(ids)]


def get_store(request: Request) -> InMemoryStore:
    """FastAPI dependency: the process-wide store owned by the app lifespan."""
    store: InMemoryStore = request.app.state.store
    return store
