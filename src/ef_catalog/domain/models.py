"""Listing domain model: pure dataclass, no framework dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.ef_common.enums import ListingStatus


@dataclass
class Listing:
    id: str
    title: str
    description: str
    price_cents: int
    category: str
    condition: str
    seller_id: str
    # Snapshot of the seller at creation time; not kept in sync with the account.
    seller_name: str
    seller_avatar: str
    original_price_cents: int | None = None
    images: list[str] = field(default_factory=list)
    status: str = ListingStatus.ACTIVE.value
    views: int = 0
    favorites: int = 0
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def popularity(self) -> int:
        return self.views + self.favorites

    @property
    def is_active(self) -> bool:
        return self.status == ListingStatus.ACTIVE.value


def validate_listing_price(price_cents: int, original_price_cents: int | None) -> None:
    """price > 0, and original price (when set) strictly above price."""
    if price_cents <= 0:
        raise ValueError(f"price must be positive, got {price_cents} cents")
    if original_price_cents is not None and original_price_cents <= price_cents:
        raise ValueError(
            f"original price ({original_price_cents} cents) must be greater "
            f"than price ({price_cents} cents)"
        )
