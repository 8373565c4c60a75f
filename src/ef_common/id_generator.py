"""Random 128-bit identifiers for store rows and orders."""

import uuid


def generate_id() -> str:
    """Generate a collision-free 32-char hex ID (uuid4)."""
    return uuid.uuid4().hex


def generate_order_id() -> str:
    """Order IDs are human-facing: 'ORD-' + upper-case hex."""
    return f"ORD-{uuid.uuid4().hex.upper()}"


def cart_line_key(account_id: str, listing_id: str) -> str:
    """Composite cart key: one line per (account, listing)."""
    return f"{account_id}::{listing_id}"
