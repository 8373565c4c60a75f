"""ef_catalog REST endpoints.

GET    /listings                  all listings, or one seller's (?seller_id=)
GET    /listings/search           browse active listings (filter + sort)
POST   /listings                  create (bearer)
GET    /listings/{id}             detail
PUT    /listings/{id}             partial update (bearer, seller only)
DELETE /listings/{id}             delete (bearer, seller only)
POST   /listings/{id}/views       count a view
POST   /listings/{id}/favorite    favorites + 1
DELETE /listings/{id}/favorite    favorites - 1 (floor 0)
GET    /accounts/{id}/listings    seller's listings by status (default active)
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.ef_catalog.application.schemas import (
    CreateListingRequest,
    ListingListResponse,
    ListingOut,
    UpdateListingRequest,
)
from src.ef_catalog.application.service import CatalogApplicationService
from src.ef_catalog.domain.browse import BrowseFilter
from src.ef_catalog.domain.models import Listing
from src.ef_common.cents import to_cents
from src.ef_common.enums import BrowseSort, ListingCondition
from src.ef_common.response import ApiResponse, respond
from src.ef_gateway.account.models import Account
from src.ef_gateway.auth.dependencies import get_current_account, get_current_account_id
from src.ef_store.memory import InMemoryStore, get_store

router = APIRouter(prefix="/listings", tags=["listings"])
owner_router = APIRouter(prefix="/accounts", tags=["listings"])

_service = CatalogApplicationService()


def _products(listings: list[Listing]) -> dict[str, object]:
    return ListingListResponse(
        products=[ListingOut.from_domain(lst) for lst in listings]
    ).model_dump()


def _product(listing: Listing) -> dict[str, object]:
    return {"product": ListingOut.from_domain(listing).model_dump()}


@router.get("")
async def list_listings(
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
    seller_id: str | None = Query(None, description="Only this seller's listings"),
) -> ApiResponse:
    listings = await _service.list_listings(store, seller_id)
    return respond(request, _products(listings))


@router.get("/search")
async def search_listings(
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
    q: str | None = Query(None, description="Case-insensitive match on title, description, tags"),
    category: str | None = Query(None),
    condition: ListingCondition | None = Query(None),
    min_price: Decimal | None = Query(None, ge=0, decimal_places=2),
    max_price: Decimal | None = Query(None, ge=0, decimal_places=2),
    sort: BrowseSort = Query(BrowseSort.NEWEST),
) -> ApiResponse:
    f = BrowseFilter(
        query=q,
        category=category,
        condition=condition.value if condition else None,
        min_price_cents=to_cents(min_price) if min_price is not None else None,
        max_price_cents=to_cents(max_price) if max_price is not None else None,
        sort=sort,
    )
    listings = await _service.search(store, f)
    return respond(request, _products(listings))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_listing(
    request: Request,
    body: CreateListingRequest,
    seller: Annotated[Account, Depends(get_current_account)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    listing = await _service.create_listing(store, seller, body)
    return respond(request, _product(listing), "Product created")


@router.get("/{listing_id}")
async def get_listing(
    listing_id: str,
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    listing = await _service.get_listing(store, listing_id)
    return respond(request, _product(listing))


@router.put("/{listing_id}")
async def update_listing(
    listing_id: str,
    request: Request,
    body: UpdateListingRequest,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    listing = await _service.update_listing(store, account_id, listing_id, body)
    return respond(request, _product(listing))


@router.delete("/{listing_id}")
async def delete_listing(
    listing_id: str,
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    await _service.delete_listing(store, account_id, listing_id)
    return respond(request, {"message": "Product deleted successfully"})


@router.post("/{listing_id}/views")
async def record_view(
    listing_id: str,
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    listing = await _service.record_view(store, listing_id)
    return respond(request, _product(listing))


@router.post("/{listing_id}/favorite")
async def favorite(
    listing_id: str,
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    listing = await _service.favorite(store, listing_id)
    return respond(request, _product(listing))


@router.delete("/{listing_id}/favorite")
async def unfavorite(
    listing_id: str,
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    listing = await _service.unfavorite(store, listing_id)
    return respond(request, _product(listing))


@owner_router.get("/{account_id}/listings")
async def list_owner_listings(
    account_id: str,
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
    status_filter: str = Query("active", alias="status", pattern="^(active|sold|draft|all)$"),
) -> ApiResponse:
    listings = await _service.list_by_owner(store, account_id, status_filter)
    return respond(request, _products(listings))
