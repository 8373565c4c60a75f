"""Cart domain models: pure dataclasses, no framework dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.ef_catalog.domain.models import Listing


@dataclass
class CartLine:
    """Stored row: a reference to a listing, never a copy of it."""

    account_id: str
    listing_id: str
    quantity: int  # always >= 1 while the line exists
    added_at: datetime | None = None


@dataclass
class CartItem:
    """A cart line joined with the listing's current data."""

    line: CartLine
    listing: Listing

    @property
    def line_total_cents(self) -> int:
        return self.listing.price_cents * self.line.quantity


@dataclass
class CartSnapshot:
    items: list[CartItem]

    @property
    def total_items(self) -> int:
        return sum(item.line.quantity for item in self.items)

    @property
    def total_price_cents(self) -> int:
        # Live prices: this is pre-checkout and intentionally not frozen.
        return sum(item.line_total_cents for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items
