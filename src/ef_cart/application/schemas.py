"""Pydantic schemas for cart endpoints."""

from pydantic import BaseModel, Field

from src.ef_cart.domain.models import CartItem, CartSnapshot
from src.ef_catalog.application.schemas import ListingOut
from src.ef_common.cents import cents_to_decimal
from src.ef_common.id_generator import cart_line_key


class AddCartItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int


class CartItemOut(BaseModel):
    id: str
    product: ListingOut
    quantity: int
    line_total_cents: int
    added_at: str

    @classmethod
    def from_domain(cls, item: CartItem) -> "CartItemOut":
        line = item.line
        return cls(
            id=cart_line_key(line.account_id, line.listing_id),
            product=ListingOut.from_domain(item.listing),
            quantity=line.quantity,
            line_total_cents=item.line_total_cents,
            added_at=line.added_at.isoformat() if line.added_at else "",
        )


class CartResponse(BaseModel):
    items: list[CartItemOut]
    total_items: int
    total_price_cents: int
    total_price: str

    @classmethod
    def from_snapshot(cls, snapshot: CartSnapshot) -> "CartResponse":
        return cls(
            items=[CartItemOut.from_domain(i) for i in snapshot.items],
            total_items=snapshot.total_items,
            total_price_cents=snapshot.total_price_cents,
            total_price=str(cents_to_decimal(snapshot.total_price_cents)),
        )
