"""Global enums shared by catalog, cart and checkout."""

from enum import Enum


class ListingStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    DRAFT = "draft"


class ListingCondition(str, Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class BrowseSort(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    POPULAR = "popular"


class PaymentType(str, Enum):
    CARD = "card"
    PAYPAL = "paypal"
    CRYPTO = "crypto"


class OrderStatus(str, Enum):
    # Only CONFIRMED is ever assigned; later states are display labels only.
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
