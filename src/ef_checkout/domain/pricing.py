"""Checkout pricing: fixed business rules, all integer cents.

shipping = 0 if subtotal > $50.00 else $9.99
tax      = round_half_up(subtotal * 8%)
total    = subtotal + shipping + tax
"""

from dataclasses import dataclass

from src.ef_common.cents import percent_of

FREE_SHIPPING_THRESHOLD_CENTS = 5000
FLAT_SHIPPING_CENTS = 999
TAX_RATE_BPS = 800


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal_cents: int
    shipping_cents: int
    tax_cents: int
    total_cents: int


def compute_pricing(subtotal_cents: int) -> PriceBreakdown:
    if subtotal_cents < 0:
        raise ValueError(f"subtotal must not be negative, got {subtotal_cents}")
    shipping = 0 if subtotal_cents > FREE_SHIPPING_THRESHOLD_CENTS else FLAT_SHIPPING_CENTS
    tax = percent_of(subtotal_cents, TAX_RATE_BPS)
    return PriceBreakdown(
        subtotal_cents=subtotal_cents,
        shipping_cents=shipping,
        tax_cents=tax,
        total_cents=subtotal_cents + shipping + tax,
    )
