"""Browse read path: filter then sort, over an in-memory list of listings.

All filters combine with AND. Sorting runs once, after filtering; Python's
sort is stable, so ties keep the store's iteration order.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from src.ef_catalog.domain.models import Listing
from src.ef_common.enums import BrowseSort

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class BrowseFilter:
    query: str | None = None
    category: str | None = None
    condition: str | None = None
    min_price_cents: int | None = None  # inclusive
    max_price_cents: int | None = None  # inclusive
    sort: BrowseSort = BrowseSort.NEWEST
    active_only: bool = True


def _matches_text(listing: Listing, needle: str) -> bool:
    needle = needle.lower()
    return (
        needle in listing.title.lower()
        or needle in listing.description.lower()
        or any(needle in tag.lower() for tag in listing.tags)
    )


def _matches(listing: Listing, f: BrowseFilter) -> bool:
    if f.active_only and not listing.is_active:
        return False
    if f.query and not _matches_text(listing, f.query):
        return False
    if f.category and listing.category != f.category:
        return False
    if f.condition and listing.condition != f.condition:
        return False
    if f.min_price_cents is not None and listing.price_cents < f.min_price_cents:
        return False
    if f.max_price_cents is not None and listing.price_cents > f.max_price_cents:
        return False
    return True


def browse(listings: list[Listing], f: BrowseFilter) -> list[Listing]:
    result = [lst for lst in listings if _matches(lst, f)]

    if f.sort == BrowseSort.PRICE_ASC:
        result.sort(key=lambda lst: lst.price_cents)
    elif f.sort == BrowseSort.PRICE_DESC:
        result.sort(key=lambda lst: lst.price_cents, reverse=True)
    elif f.sort == BrowseSort.POPULAR:
        result.sort(key=lambda lst: lst.popularity, reverse=True)
    else:
        result.sort(key=lambda lst: lst.created_at or _EPOCH, reverse=True)
    return result
