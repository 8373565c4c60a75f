"""UTC datetime utilities."""

from datetime import datetime, timedelta, timezone

DELIVERY_ESTIMATE = timedelta(days=7)


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def estimated_delivery(created_at: datetime) -> datetime:
    """Orders are promised a fixed 7 days after creation."""
    return created_at + DELIVERY_ESTIMATE
