"""Listing repository Protocol: the store calls the catalog service relies on.

InMemoryStore satisfies it structurally; unit tests may inject an AsyncMock.
"""

from typing import Any, Protocol

from src.ef_catalog.domain.models import Listing


class ListingRepositoryProtocol(Protocol):
    async def create_listing(self, listing: Listing) -> Listing: ...

    async def get_listing(self, listing_id: str) -> Listing | None: ...

    async def list_listings(self) -> list[Listing]: ...

    async def list_listings_by_seller(self, seller_id: str) -> list[Listing]: ...

    async def update_listing(self, listing_id: str, **updates: Any) -> bool: ...

    async def delete_listing(self, listing_id: str) -> bool: ...
