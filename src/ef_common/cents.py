"""Integer arithmetic utilities for cents-based money.

All prices, subtotals, taxes and totals use int (cents). Decimal only
appears at the API boundary (request parsing and response rendering).
Wallet amounts use int wei (1 ETH = 10**18 wei).
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

WEI_PER_ETH = 10**18


def to_cents(amount: Decimal | str | int | float) -> int:
    """Convert a decimal dollar amount to cents: Decimal('25.99') -> 2599.

    Rejects amounts with more than two fractional digits.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Not a valid amount: {amount!r}") from None
    cents = value * 100
    if cents != cents.to_integral_value():
        raise ValueError(f"Amount must have at most 2 decimal places, got {amount}")
    return int(cents)


def cents_to_decimal(cents: int) -> Decimal:
    """Convert cents to a 2-place Decimal: 2599 -> Decimal('25.99')."""
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def percent_of(cents: int, rate_bps: int) -> int:
    """Apply a basis-point rate, rounding half up to the cent.

    tax = round(cents * rate_bps / 10000)
    Using integer half-up: (a + b // 2) // b
    """
    if cents == 0 or rate_bps == 0:
        return 0
    return (cents * rate_bps + 5000) // 10000


def usd_cents_to_wei(cents: int, eth_price_cents: int) -> int:
    """Convert a USD amount to wei at a fixed ETH price, rounding up.

    wei = ceil(cents * 10**18 / eth_price_cents)
    """
    if eth_price_cents <= 0:
        raise ValueError(f"ETH price must be positive, got {eth_price_cents}")
    return (cents * WEI_PER_ETH + eth_price_cents - 1) // eth_price_cents


def wei_to_eth_display(wei: int) -> str:
    """Render wei as an ETH string without trailing zeros: 10**16 -> '0.01'."""
    eth = Decimal(wei) / Decimal(WEI_PER_ETH)
    text = format(eth.normalize(), "f")
    return text
