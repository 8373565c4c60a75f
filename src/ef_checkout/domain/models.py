"""Order domain models: pure dataclasses, no framework dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.ef_catalog.domain.models import Listing
from src.ef_common.enums import OrderStatus


@dataclass
class ShippingAddress:
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str = "US"


@dataclass
class PaymentRecord:
    type: str  # PaymentType value
    last4: str | None = None  # card only
    wallet_address: str | None = None  # crypto only
    transaction_hash: str | None = None  # crypto only
    amount_wei: int | None = None  # crypto only


@dataclass
class OrderLine:
    """Listing copied by value at checkout; later edits do not reach it."""

    listing: Listing
    quantity: int

    @property
    def line_total_cents(self) -> int:
        return self.listing.price_cents * self.quantity


@dataclass
class Order:
    id: str
    account_id: str
    lines: list[OrderLine]
    # Frozen at creation, never recomputed.
    subtotal_cents: int
    shipping_cents: int
    tax_cents: int
    total_cents: int
    shipping_address: ShippingAddress
    payment: PaymentRecord
    status: str = OrderStatus.CONFIRMED.value
    created_at: datetime | None = None
    estimated_delivery: datetime | None = None
    item_count: int = field(init=False)

    def __post_init__(self) -> None:
        self.item_count = sum(line.quantity for line in self.lines)
