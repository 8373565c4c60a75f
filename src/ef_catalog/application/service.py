"""CatalogApplicationService: listing CRUD, owner views, browse and counters.

Ownership is enforced here, on top of the store: only the seller may update
or delete a listing. The store itself performs no ownership checks.
"""

from src.ef_catalog.application.schemas import CreateListingRequest, UpdateListingRequest
from src.ef_catalog.domain.browse import BrowseFilter, browse
from src.ef_catalog.domain.models import Listing, validate_listing_price
from src.ef_catalog.domain.repository import ListingRepositoryProtocol
from src.ef_common.errors import (
    InvalidListingPriceError,
    ListingForbiddenError,
    ListingNotFoundError,
)
from src.ef_common.id_generator import generate_id
from src.ef_gateway.account.models import Account

STATUS_ALL = "all"


class CatalogApplicationService:
    async def list_listings(
        self, store: ListingRepositoryProtocol, seller_id: str | None = None
    ) -> list[Listing]:
        if seller_id:
            return await store.list_listings_by_seller(seller_id)
        return await store.list_listings()

    async def list_by_owner(
        self, store: ListingRepositoryProtocol, seller_id: str, status: str
    ) -> list[Listing]:
        """Owner's listings with a given status; ``all`` disables the filter."""
        listings = await store.list_listings_by_seller(seller_id)
        if status == STATUS_ALL:
            return listings
        return [lst for lst in listings if lst.status == status]

    async def search(self, store: ListingRepositoryProtocol, f: BrowseFilter) -> list[Listing]:
        return browse(await store.list_listings(), f)

    async def get_listing(self, store: ListingRepositoryProtocol, listing_id: str) -> Listing:
        listing = await store.get_listing(listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)
        return listing

    async def create_listing(
        self,
        store: ListingRepositoryProtocol,
        seller: Account,
        req: CreateListingRequest,
    ) -> Listing:
        price_cents, original_cents = req.price_cents, req.original_price_cents
        try:
            validate_listing_price(price_cents, original_cents)
        except ValueError as exc:
            raise InvalidListingPriceError(str(exc)) from None

        return await store.create_listing(
            Listing(
                id=generate_id(),
                title=req.title,
                description=req.description,
                price_cents=price_cents,
                original_price_cents=original_cents,
                category=req.category,
                condition=req.condition.value,
                images=list(req.images),
                seller_id=seller.id,
                seller_name=seller.name,
                seller_avatar=seller.avatar,
                status=req.status.value,
                tags=list(req.tags),
            )
        )

    async def update_listing(
        self,
        store: ListingRepositoryProtocol,
        actor_id: str,
        listing_id: str,
        req: UpdateListingRequest,
    ) -> Listing:
        listing = await self._get_owned(store, actor_id, listing_id)
        updates = req.to_updates()

        # Validate the merged result, not just the fields sent.
        price = updates.get("price_cents", listing.price_cents)
        original = updates.get("original_price_cents", listing.original_price_cents)
        try:
            validate_listing_price(price, original)  # type: ignore[arg-type]
        except ValueError as exc:
            raise InvalidListingPriceError(str(exc)) from None

        if updates and not await store.update_listing(listing_id, **updates):
            raise ListingNotFoundError(listing_id)
        return await self.get_listing(store, listing_id)

    async def delete_listing(
        self, store: ListingRepositoryProtocol, actor_id: str, listing_id: str
    ) -> None:
        await self._get_owned(store, actor_id, listing_id)
        if not await store.delete_listing(listing_id):
            raise ListingNotFoundError(listing_id)

    async def record_view(self, store: ListingRepositoryProtocol, listing_id: str) -> Listing:
        listing = await self.get_listing(store, listing_id)
        await store.update_listing(listing_id, views=listing.views + 1)
        return await self.get_listing(store, listing_id)

    async def favorite(self, store: ListingRepositoryProtocol, listing_id: str) -> Listing:
        listing = await self.get_listing(store, listing_id)
        await store.update_listing(listing_id, favorites=listing.favorites + 1)
        return await self.get_listing(store, listing_id)

    async def unfavorite(self, store: ListingRepositoryProtocol, listing_id: str) -> Listing:
        listing = await self.get_listing(store, listing_id)
        await store.update_listing(listing_id, favorites=max(0, listing.favorites - 1))
        return await self.get_listing(store, listing_id)

    async def _get_owned(
        self, store: ListingRepositoryProtocol, actor_id: str, listing_id: str
    ) -> Listing:
        listing = await self.get_listing(store, listing_id)
        if listing.seller_id != actor_id:
            raise ListingForbiddenError(listing_id)
        return listing
