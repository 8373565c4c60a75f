"""Shared test fixtures."""

import os

# Settings() requires a secret at import time.
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from httpx import ASGITransport, AsyncClient

from src.ef_checkout.infrastructure.wallet_providers import StubWalletProvider
from src.ef_store.memory import InMemoryStore
from src.main import app

WALLET_ADDRESS = "0x00000000000000000000000000000000000000b0"
WALLET_BALANCE_WEI = 10**18  # 1 ETH = $2,000 at the default rate


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cheap hashes keep the suite fast; verify_password reads the cost from the hash."""
    monkeypatch.setattr("src.ef_gateway.auth.password._BCRYPT_ROUNDS", 4)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def wallet() -> StubWalletProvider:
    return StubWalletProvider({WALLET_ADDRESS: WALLET_BALANCE_WEI})


@pytest.fixture
async def client(store: InMemoryStore, wallet: StubWalletProvider) -> AsyncClient:
    """Async HTTP client over a fresh store and stub wallet.

    ASGITransport does not run the lifespan, so app.state is filled in here.
    """
    app.state.store = store
    app.state.wallet = wallet
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
