"""Pydantic schemas for listing endpoints.

Prices arrive as decimal dollars and are converted to integer cents here;
responses carry both ``price_cents`` and a ``price`` string ("25.99").
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from src.ef_catalog.domain.models import Listing
from src.ef_common.cents import cents_to_decimal, to_cents
from src.ef_common.enums import ListingCondition, ListingStatus


def _clean_tags(tags: list[str]) -> list[str]:
    """Strip, drop empties, de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


class CreateListingRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    original_price: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: str = Field("Other", min_length=1, max_length=100)
    condition: ListingCondition = ListingCondition.GOOD
    images: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    status: ListingStatus = ListingStatus.ACTIVE

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)

    @model_validator(mode="after")
    def original_above_price(self) -> "CreateListingRequest":
        if self.original_price is not None and self.original_price <= self.price:
            raise ValueError("original_price must be greater than price")
        return self

    @property
    def price_cents(self) -> int:
        return to_cents(self.price)

    @property
    def original_price_cents(self) -> int | None:
        return to_cents(self.original_price) if self.original_price is not None else None


class UpdateListingRequest(BaseModel):
    """Partial update. Sending ``original_price: null`` clears the original price."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=5000)
    price: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    original_price: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, min_length=1, max_length=100)
    condition: ListingCondition | None = None
    images: list[str] | None = None
    tags: list[str] | None = None
    status: ListingStatus | None = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v) if v is not None else None

    def to_updates(self) -> dict[str, object]:
        """Store field updates for the fields the client actually sent."""
        sent = self.model_fields_set
        updates: dict[str, object] = {}
        for name in ("title", "description", "category", "images", "tags"):
            if name in sent and getattr(self, name) is not None:
                updates[name] = getattr(self, name)
        if "condition" in sent and self.condition is not None:
            updates["condition"] = self.condition.value
        if "status" in sent and self.status is not None:
            updates["status"] = self.status.value
        if "price" in sent and self.price is not None:
            updates["price_cents"] = to_cents(self.price)
        if "original_price" in sent:
            updates["original_price_cents"] = (
                to_cents(self.original_price) if self.original_price is not None else None
            )
        return updates


class ListingOut(BaseModel):
    id: str
    title: str
    description: str
    price_cents: int
    price: str
    original_price_cents: int | None
    original_price: str | None
    category: str
    condition: str
    images: list[str]
    seller_id: str
    seller_name: str
    seller_avatar: str
    status: str
    views: int
    favorites: int
    tags: list[str]
    created_at: str

    @classmethod
    def from_domain(cls, lst: Listing) -> "ListingOut":
        return cls(
            id=lst.id,
            title=lst.title,
            description=lst.description,
            price_cents=lst.price_cents,
            price=str(cents_to_decimal(lst.price_cents)),
            original_price_cents=lst.original_price_cents,
            original_price=(
                str(cents_to_decimal(lst.original_price_cents))
                if lst.original_price_cents is not None
                else None
            ),
            category=lst.category,
            condition=lst.condition,
            images=list(lst.images),
            seller_id=lst.seller_id,
            seller_name=lst.seller_name,
            seller_avatar=lst.seller_avatar,
            status=lst.status,
            views=lst.views,
            favorites=lst.favorites,
            tags=list(lst.tags),
            created_at=lst.created_at.isoformat() if lst.created_at else "",
        )


class ListingListResponse(BaseModel):
    products: list[ListingOut]
