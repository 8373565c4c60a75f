"""Demo data: one seller and two active listings.

Applied once at startup when SEED_DEMO_DATA is on. Skipped if the demo
account already exists so repeated calls are harmless.
"""

import logging

from src.ef_catalog.domain.models import Listing
from src.ef_gateway.account.models import Account
from src.ef_gateway.auth.password import hash_password
from src.ef_store.memory import InMemoryStore

logger = logging.getLogger("ef.app")

DEMO_ACCOUNT_ID = "user-1"
DEMO_EMAIL = "john@example.com"
_DEMO_AVATAR = "/placeholder.svg?height=40&width=40"


async def seed_demo_data(store: InMemoryStore, password: str) -> None:
    if await store.get_account_by_email(DEMO_EMAIL) is not None:
        return

    await store.create_account(
        Account(
            id=DEMO_ACCOUNT_ID,
            name="John Doe",
            email=DEMO_EMAIL,
            password_hash=hash_password(password),
            avatar=_DEMO_AVATAR,
        )
    )
    for listing in (
        Listing(
            id="product-1",
            title="Eco-Friendly Water Bottle",
            description="Reusable stainless steel water bottle with bamboo cap",
            price_cents=2599,
            original_price_cents=3599,
            category="Kitchen & Dining",
            condition="New",
            images=["/reusable-water-bottle.png"],
            seller_id=DEMO_ACCOUNT_ID,
            seller_name="John Doe",
            seller_avatar=_DEMO_AVATAR,
            tags=["eco-friendly", "reusable", "water bottle"],
        ),
        Listing(
            id="product-2",
            title="Organic Cotton Tote Bag",
            description="Sustainable shopping bag made from 100% organic cotton",
            price_cents=1599,
            category="Bags & Accessories",
            condition="New",
            images=["/simple-canvas-tote.png"],
            seller_id=DEMO_ACCOUNT_ID,
            seller_name="John Doe",
            seller_avatar=_DEMO_AVATAR,
            tags=["organic", "cotton", "sustainable"],
        ),
    ):
        await store.create_listing(listing)

    logger.info("Seeded demo account %s with 2 listings", DEMO_EMAIL)
