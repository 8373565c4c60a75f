"""Integration tests for quote, checkout and order history."""

import json
from typing import Any

import httpx
import pytest
from httpx import AsyncClient

from config.settings import settings
from src.ef_checkout.infrastructure.wallet_providers import (
    JsonRpcWalletProvider,
    StubWalletProvider,
    UnavailableWalletProvider,
)
from src.main import app

ADDRESS = {
    "name": "Bea Buyer",
    "address": "1 Green Lane",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97201",
}
CARD = {
    "type": "card",
    "card_number": "4242 4242 4242 4242",
    "expiry": "12/29",
    "cvv": "123",
    "name_on_card": "Bea Buyer",
}


@pytest.fixture
async def cart_of_40(client: AsyncClient, seller, buyer, make_listing) -> dict[str, Any]:
    """Buyer's cart: 2 x $20.00 (subtotal $40.00)."""
    product = await make_listing(seller["headers"], price="20.00")
    resp = await client.post(
        "/api/v1/cart",
        json={"product_id": product["id"], "quantity": 2},
        headers=buyer["headers"],
    )
    assert resp.status_code == 200
    return product


async def _checkout(client: AsyncClient, headers: dict[str, str], payment: dict) -> Any:
    return await client.post(
        "/api/v1/checkout",
        json={"shipping_address": ADDRESS, "payment": payment},
        headers=headers,
    )


async def _order_count(client: AsyncClient, headers: dict[str, str]) -> int:
    resp = await client.get("/api/v1/orders", headers=headers)
    return len(resp.json()["data"]["orders"])


class TestQuote:
    async def test_empty_cart(self, client: AsyncClient, buyer) -> None:
        resp = await client.get("/api/v1/checkout/quote", headers=buyer["headers"])
        assert resp.status_code == 400
        assert resp.json()["code"] == 3002

    async def test_quote_under_free_shipping(
        self, client: AsyncClient, buyer, cart_of_40
    ) -> None:
        resp = await client.get("/api/v1/checkout/quote", headers=buyer["headers"])
        assert resp.status_code == 200
        quote = resp.json()["data"]
        assert quote["total_items"] == 2
        assert quote["subtotal_cents"] == 4000
        assert quote["shipping_cents"] == 999
        assert quote["tax_cents"] == 320
        assert quote["total_cents"] == 5319
        assert quote["total"] == "53.19"
        # $53.19 at $2,000/ETH
        assert quote["crypto_amount_wei"] == "26595000000000000"
        assert quote["crypto_amount_eth"] == "0.026595"

    async def test_quote_free_shipping(
        self, client: AsyncClient, seller, buyer, make_listing
    ) -> None:
        product = await make_listing(seller["headers"], price="60.00")
        await client.post(
            "/api/v1/cart", json={"product_id": product["id"]}, headers=buyer["headers"]
        )
        quote = (await client.get("/api/v1/checkout/quote", headers=buyer["headers"])).json()
        assert quote["data"]["shipping_cents"] == 0
        assert quote["data"]["tax_cents"] == 480
        assert quote["data"]["total_cents"] == 6480


class TestCardAndPaypal:
    async def test_card_checkout(self, client: AsyncClient, buyer, cart_of_40) -> None:
        resp = await _checkout(client, buyer["headers"], CARD)
        assert resp.status_code == 201
        order = resp.json()["data"]["order"]
        assert order["id"].startswith("ORD-")
        assert order["status"] == "confirmed"
        assert order["item_count"] == 2
        assert order["subtotal_cents"] == 4000
        assert order["shipping_cents"] == 999
        assert order["tax_cents"] == 320
        assert order["total_cents"] == 5319
        assert order["payment"] == {
            "type": "card",
            "last4": "4242",
            "wallet_address": None,
            "transaction_hash": None,
            "amount_wei": None,
            "amount_eth": None,
        }
        assert order["shipping_address"]["country"] == "US"
        assert order["estimated_delivery"] > order["created_at"]
        assert "4242 4242" not in resp.text
        assert CARD["cvv"] not in str(order["payment"])

        cart = await client.get("/api/v1/cart", headers=buyer["headers"])
        assert cart.json()["data"]["items"] == []
        assert await _order_count(client, buyer["headers"]) == 1

    async def test_paypal_checkout(self, client: AsyncClient, buyer, cart_of_40) -> None:
        resp = await _checkout(client, buyer["headers"], {"type": "paypal"})
        assert resp.status_code == 201
        assert resp.json()["data"]["order"]["payment"]["type"] == "paypal"

    async def test_empty_cart_rejected(self, client: AsyncClient, buyer) -> None:
        resp = await _checkout(client, buyer["headers"], CARD)
        assert resp.status_code == 400
        assert resp.json()["code"] == 3002
        assert await _order_count(client, buyer["headers"]) == 0

    @pytest.mark.parametrize(
        "override",
        [{"card_number": "1234"}, {"expiry": "13/29"}, {"cvv": "12a"}],
    )
    async def test_bad_card_rejected(
        self, client: AsyncClient, buyer, cart_of_40, override: dict[str, str]
    ) -> None:
        resp = await _checkout(client, buyer["headers"], {**CARD, **override})
        assert resp.status_code == 400
        assert resp.json()["code"] == 4002
        assert await _order_count(client, buyer["headers"]) == 0

    async def test_missing_card_field(self, client: AsyncClient, buyer, cart_of_40) -> None:
        payment = {k: v for k, v in CARD.items() if k != "name_on_card"}
        resp = await _checkout(client, buyer["headers"], payment)
        assert resp.status_code == 400
        assert resp.json()["code"] == 9001

    @pytest.mark.parametrize("field", ["name_on_card", "cvv"])
    async def test_blank_card_field(
        self, client: AsyncClient, buyer, cart_of_40, field: str
    ) -> None:
        resp = await _checkout(client, buyer["headers"], {**CARD, field: "   "})
        assert resp.status_code == 400
        assert resp.json()["code"] == 9001
        assert await _order_count(client, buyer["headers"]) == 0

    async def test_blank_address_field(self, client: AsyncClient, buyer, cart_of_40) -> None:
        resp = await client.post(
            "/api/v1/checkout",
            json={"shipping_address": {**ADDRESS, "city": "  "}, "payment": CARD},
            headers=buyer["headers"],
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 9001

    async def test_unknown_payment_type(self, client: AsyncClient, buyer, cart_of_40) -> None:
        resp = await _checkout(client, buyer["headers"], {"type": "cash"})
        assert resp.status_code == 400

    async def test_missing_address_field(self, client: AsyncClient, buyer, cart_of_40) -> None:
        address = {k: v for k, v in ADDRESS.items() if k != "city"}
        resp = await client.post(
            "/api/v1/checkout",
            json={"shipping_address": address, "payment": CARD},
            headers=buyer["headers"],
        )
        assert resp.status_code == 400

    async def test_order_total_frozen(
        self, client: AsyncClient, seller, buyer, cart_of_40
    ) -> None:
        order = (await _checkout(client, buyer["headers"], CARD)).json()["data"]["order"]
        await client.put(
            f"/api/v1/listings/{cart_of_40['id']}",
            json={"price": "99.00"},
            headers=seller["headers"],
        )
        resp = await client.get(f"/api/v1/orders/{order['id']}", headers=buyer["headers"])
        stored = resp.json()["data"]["order"]
        assert stored["total_cents"] == 5319
        assert stored["items"][0]["product"]["price_cents"] == 2000


class TestCrypto:
    async def test_crypto_checkout(
        self, client: AsyncClient, buyer, cart_of_40, wallet: StubWalletProvider
    ) -> None:
        (address,) = await wallet.get_accounts()
        before = await wallet.get_balance(address)

        resp = await _checkout(client, buyer["headers"], {"type": "crypto"})
        assert resp.status_code == 201
        payment = resp.json()["data"]["order"]["payment"]
        assert payment["type"] == "crypto"
        assert payment["wallet_address"] == address
        assert payment["amount_wei"] == "26595000000000000"
        assert payment["transaction_hash"].startswith("0x")

        assert len(wallet.transfers) == 1
        transfer = wallet.transfers[0]
        assert transfer.to_address == settings.MERCHANT_WALLET_ADDRESS
        assert transfer.amount_wei == 26_595_000_000_000_000
        assert await wallet.get_balance(address) == before - transfer.amount_wei

    async def test_insufficient_balance(self, client: AsyncClient, buyer, cart_of_40) -> None:
        poor = StubWalletProvider({"0xpoor": 10**15})
        app.state.wallet = poor
        resp = await _checkout(client, buyer["headers"], {"type": "crypto"})
        assert resp.status_code == 422
        assert resp.json()["code"] == 4003
        assert poor.transfers == []
        assert await _order_count(client, buyer["headers"]) == 0
        cart = await client.get("/api/v1/cart", headers=buyer["headers"])
        assert cart.json()["data"]["total_items"] == 2

    async def test_user_rejects_transfer(self, client: AsyncClient, buyer, cart_of_40) -> None:
        app.state.wallet = StubWalletProvider({"0xabc": 10**18}, reject_transfers=True)
        resp = await _checkout(client, buyer["headers"], {"type": "crypto"})
        assert resp.status_code == 502
        assert resp.json()["code"] == 5002
        assert "User rejected" in resp.json()["message"]
        assert await _order_count(client, buyer["headers"]) == 0

    async def test_unconnected_address(self, client: AsyncClient, buyer, cart_of_40) -> None:
        resp = await _checkout(
            client, buyer["headers"], {"type": "crypto", "wallet_address": "0xnot-mine"}
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 4004

    async def test_no_wallet_accounts(self, client: AsyncClient, buyer, cart_of_40) -> None:
        app.state.wallet = StubWalletProvider({})
        resp = await _checkout(client, buyer["headers"], {"type": "crypto"})
        assert resp.status_code == 400
        assert resp.json()["code"] == 4004

    async def test_wallet_unavailable(self, client: AsyncClient, buyer, cart_of_40) -> None:
        app.state.wallet = UnavailableWalletProvider()
        resp = await _checkout(client, buyer["headers"], {"type": "crypto"})
        assert resp.status_code == 503
        assert resp.json()["code"] == 5001

    async def test_garbled_rpc_balance(self, client: AsyncClient, buyer, cart_of_40) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            if body["method"] == "eth_accounts":
                reply = {"jsonrpc": "2.0", "id": body["id"], "result": ["0xabc"]}
                return httpx.Response(200, json=reply)
            return httpx.Response(200, text="<html>gateway</html>")

        rpc_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app.state.wallet = JsonRpcWalletProvider("http://node.test", client=rpc_client)
        resp = await _checkout(client, buyer["headers"], {"type": "crypto"})
        assert resp.status_code == 503
        assert resp.json()["code"] == 5001
        assert await _order_count(client, buyer["headers"]) == 0


class TestOrderHistory:
    async def test_newest_first(
        self, client: AsyncClient, seller, buyer, make_listing
    ) -> None:
        ids = []
        for price in ("10.00", "20.00"):
            product = await make_listing(seller["headers"], price=price)
            await client.post(
                "/api/v1/cart", json={"product_id": product["id"]}, headers=buyer["headers"]
            )
            order = (await _checkout(client, buyer["headers"], CARD)).json()["data"]["order"]
            ids.append(order["id"])

        resp = await client.get("/api/v1/orders", headers=buyer["headers"])
        assert [o["id"] for o in resp.json()["data"]["orders"]] == list(reversed(ids))

    async def test_other_accounts_order_not_found(
        self, client: AsyncClient, seller, buyer, cart_of_40
    ) -> None:
        order = (await _checkout(client, buyer["headers"], CARD)).json()["data"]["order"]
        resp = await client.get(f"/api/v1/orders/{order['id']}", headers=seller["headers"])
        assert resp.status_code == 404
        assert resp.json()["code"] == 4001

    async def test_unknown_order(self, client: AsyncClient, buyer) -> None:
        resp = await client.get("/api/v1/orders/ORD-NOPE", headers=buyer["headers"])
        assert resp.status_code == 404
