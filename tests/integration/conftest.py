"""Integration-test fixtures: every test runs against its own empty store."""

import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from httpx import AsyncClient

Register = Callable[..., Awaitable[dict[str, Any]]]
MakeListing = Callable[..., Awaitable[dict[str, Any]]]


def unique_account() -> dict[str, str]:
    """Generate unique credentials to avoid test pollution."""
    uid = uuid.uuid4().hex[:8]
    return {
        "name": f"Tester {uid}",
        "email": f"test_{uid}@example.com",
        "password": "secret123",
    }


@pytest.fixture
def register(client: AsyncClient) -> Register:
    """Register an account; returns the response data plus ready-made auth headers."""

    async def _register(**overrides: str) -> dict[str, Any]:
        body = {**unique_account(), **overrides}
        resp = await client.post("/api/v1/accounts", json=body)
        assert resp.status_code == 200, resp.text
        data: dict[str, Any] = resp.json()["data"]
        data["password"] = body["password"]
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _register


@pytest.fixture
def make_listing(client: AsyncClient) -> MakeListing:
    async def _make(headers: dict[str, str], **fields: Any) -> dict[str, Any]:
        body = {
            "title": "Bamboo Toothbrush",
            "description": "Biodegradable handle, soft bristles",
            "price": "20.00",
            "category": "Personal Care",
            "condition": "New",
            **fields,
        }
        resp = await client.post("/api/v1/listings", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        product: dict[str, Any] = resp.json()["data"]["product"]
        return product

    return _make


@pytest.fixture
async def seller(register: Register) -> dict[str, Any]:
    return await register(name="Sam Seller")


@pytest.fixture
async def buyer(register: Register) -> dict[str, Any]:
    return await register(name="Bea Buyer")
