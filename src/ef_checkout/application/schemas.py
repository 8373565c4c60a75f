"""Pydantic schemas for checkout and order endpoints."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.ef_catalog.application.schemas import ListingOut
from src.ef_checkout.domain.models import Order, PaymentRecord, ShippingAddress
from src.ef_checkout.domain.pricing import PriceBreakdown
from src.ef_common.cents import cents_to_decimal, wei_to_eth_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ShippingAddressIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=200)
    state: str = Field(..., min_length=1, max_length=200)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field("US", min_length=2, max_length=56)

    def to_domain(self) -> ShippingAddress:
        return ShippingAddress(
            name=self.name,
            address=self.address,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


class CardPaymentIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    type: Literal["card"]
    card_number: str = Field(..., min_length=1)
    expiry: str = Field(..., min_length=1)
    cvv: str = Field(..., min_length=1)
    name_on_card: str = Field(..., min_length=1)


class PaypalPaymentIn(BaseModel):
    type: Literal["paypal"]


class CryptoPaymentIn(BaseModel):
    type: Literal["crypto"]
    wallet_address: str | None = None


PaymentIn = Annotated[
    CardPaymentIn | PaypalPaymentIn | CryptoPaymentIn,
    Field(discriminator="type"),
]


class CheckoutRequest(BaseModel):
    shipping_address: ShippingAddressIn
    payment: PaymentIn


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class QuoteResponse(BaseModel):
    total_items: int
    subtotal_cents: int
    shipping_cents: int
    tax_cents: int
    total_cents: int
    total: str
    eth_usd_price_cents: int
    crypto_amount_wei: str  # decimal string
    crypto_amount_eth: str

    @classmethod
    def build(
        cls,
        total_items: int,
        pricing: PriceBreakdown,
        eth_price_cents: int,
        amount_wei: int,
    ) -> "QuoteResponse":
        return cls(
            total_items=total_items,
            subtotal_cents=pricing.subtotal_cents,
            shipping_cents=pricing.shipping_cents,
            tax_cents=pricing.tax_cents,
            total_cents=pricing.total_cents,
            total=str(cents_to_decimal(pricing.total_cents)),
            eth_usd_price_cents=eth_price_cents,
            crypto_amount_wei=str(amount_wei),
            crypto_amount_eth=wei_to_eth_display(amount_wei),
        )


class OrderLineOut(BaseModel):
    product: ListingOut
    quantity: int
    line_total_cents: int


class ShippingAddressOut(BaseModel):
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str

    @classmethod
    def from_domain(cls, a: ShippingAddress) -> "ShippingAddressOut":
        return cls(
            name=a.name,
            address=a.address,
            city=a.city,
            state=a.state,
            zip_code=a.zip_code,
            country=a.country,
        )


class PaymentOut(BaseModel):
    type: str
    last4: str | None = None
    wallet_address: str | None = None
    transaction_hash: str | None = None
    amount_wei: str | None = None
    amount_eth: str | None = None

    @classmethod
    def from_domain(cls, p: PaymentRecord) -> "PaymentOut":
        return cls(
            type=p.type,
            last4=p.last4,
            wallet_address=p.wallet_address,
            transaction_hash=p.transaction_hash,
            amount_wei=str(p.amount_wei) if p.amount_wei is not None else None,
            amount_eth=wei_to_eth_display(p.amount_wei) if p.amount_wei is not None else None,
        )


class OrderOut(BaseModel):
    id: str
    status: str
    items: list[OrderLineOut]
    item_count: int
    subtotal_cents: int
    shipping_cents: int
    tax_cents: int
    total_cents: int
    total: str
    shipping_address: ShippingAddressOut
    payment: PaymentOut
    created_at: str
    estimated_delivery: str

    @classmethod
    def from_domain(cls, o: Order) -> "OrderOut":
        return cls(
            id=o.id,
            status=o.status,
            items=[
                OrderLineOut(
                    product=ListingOut.from_domain(line.listing),
                    quantity=line.quantity,
                    line_total_cents=line.line_total_cents,
                )
                for line in o.lines
            ],
            item_count=o.item_count,
            subtotal_cents=o.subtotal_cents,
            shipping_cents=o.shipping_cents,
            tax_cents=o.tax_cents,
            total_cents=o.total_cents,
            total=str(cents_to_decimal(o.total_cents)),
            shipping_address=ShippingAddressOut.from_domain(o.shipping_address),
            payment=PaymentOut.from_domain(o.payment),
            created_at=o.created_at.isoformat() if o.created_at else "",
            estimated_delivery=o.estimated_delivery.isoformat() if o.estimated_delivery else "",
        )


class OrderListResponse(BaseModel):
    orders: list[OrderOut]
