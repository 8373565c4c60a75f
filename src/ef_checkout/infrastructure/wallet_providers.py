"""Wallet provider implementations of WalletProviderProtocol.

StubWalletProvider         in-memory balances, fabricated tx hashes (dev/tests)
UnavailableWalletProvider  no provider configured; every call fails
JsonRpcWalletProvider      Ethereum JSON-RPC node over httpx

Selected at startup by ``build_wallet_provider`` from settings.WALLET_PROVIDER.
"""

import itertools
import logging
import secrets
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import Request
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from config.settings import Settings
from src.ef_checkout.domain.wallet import WalletProviderProtocol
from src.ef_common.errors import WalletTransferRejectedError, WalletUnavailableError

logger = logging.getLogger("ef.wallet")

STUB_DEFAULT_ADDRESS = "0x00000000000000000000000000000000000000a1"


@dataclass
class Transfer:
    from_address: str
    to_address: str
    amount_wei: int
    transaction_hash: str


class StubWalletProvider:
    """Deterministic stand-in for a browser wallet.

    ``reject_transfers`` simulates the user declining the transaction prompt.
    """

    def __init__(
        self,
        balances: dict[str, int] | None = None,
        reject_transfers: bool = False,
    ) -> None:
        self._balances: dict[str, int] = dict(balances or {})
        self.reject_transfers = reject_transfers
        self.transfers: list[Transfer] = []

    async def get_accounts(self) -> list[str]:
        return list(self._balances)

    async def get_balance(self, address: str) -> int:
        return self._balances.get(address, 0)

    async def send_value(self, from_address: str, to_address: str, amount_wei: int) -> str:
        if self.reject_transfers:
            raise WalletTransferRejectedError("User rejected the request")
        if from_address not in self._balances:
            raise WalletTransferRejectedError(f"Unknown account {from_address}")
        if self._balances[from_address] < amount_wei:
            raise WalletTransferRejectedError("insufficient funds for transfer")

        self._balances[from_address] -= amount_wei
        self._balances[to_address] = self._balances.get(to_address, 0) + amount_wei
        tx_hash = "0x" + secrets.token_hex(32)
        self.transfers.append(Transfer(from_address, to_address, amount_wei, tx_hash))
        return tx_hash


class UnavailableWalletProvider:
    async def get_accounts(self) -> list[str]:
        raise WalletUnavailableError()

    async def get_balance(self, address: str) -> int:
        raise WalletUnavailableError()

    async def send_value(self, from_address: str, to_address: str, amount_wei: int) -> str:
        raise WalletUnavailableError()


def _read_retry():  # type: ignore[no-untyped-def]
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(httpx.TransportError),
    )


class JsonRpcWalletProvider:
    """Wallet backed by an Ethereum JSON-RPC endpoint with node-managed accounts.

    Read calls (eth_accounts, eth_getBalance) are retried on transport errors.
    eth_sendTransaction is never retried: a resend could transfer twice.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._ids = itertools.count(1)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, method: str, params: list[Any]) -> Any:
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        logger.debug("JSON-RPC %s %s", method, self._url)
        resp = await self._client.post(self._url, json=body)
        if resp.status_code >= 400:
            raise WalletUnavailableError(f"Wallet RPC returned HTTP {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError:
            raise WalletUnavailableError(f"Wallet RPC sent a non-JSON reply to {method}") from None
        if not isinstance(payload, dict):
            raise WalletUnavailableError(f"Wallet RPC sent a malformed reply to {method}")
        error = payload.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise WalletTransferRejectedError(message or "unknown error")
        return payload.get("result")

    @_read_retry()
    async def _read(self, method: str, params: list[Any]) -> Any:
        return await self._post(method, params)

    async def _call(self, method: str, params: list[Any], retried: bool) -> Any:
        try:
            if retried:
                return await self._read(method, params)
            return await self._post(method, params)
        except httpx.TransportError as exc:
            raise WalletUnavailableError(f"Wallet RPC unreachable: {exc}") from exc

    async def get_accounts(self) -> list[str]:
        result = await self._call("eth_accounts", [], retried=True)
        if result is None:
            return []
        if not isinstance(result, list):
            raise WalletUnavailableError("Wallet RPC returned malformed accounts")
        return [str(account) for account in result]

    async def get_balance(self, address: str) -> int:
        result = await self._call("eth_getBalance", [address, "latest"], retried=True)
        if not isinstance(result, str):
            raise WalletUnavailableError(f"Wallet RPC returned no balance for {address}")
        try:
            return int(result, 16)
        except ValueError:
            raise WalletUnavailableError(f"Wallet RPC returned bad balance {result!r}") from None

    async def send_value(self, from_address: str, to_address: str, amount_wei: int) -> str:
        tx = {"from": from_address, "to": to_address, "value": hex(amount_wei)}
        result = await self._call("eth_sendTransaction", [tx], retried=False)
        if not isinstance(result, str) or not result:
            raise WalletTransferRejectedError("No transaction hash returned")
        return result


def build_wallet_provider(settings: Settings) -> WalletProviderProtocol:
    kind = settings.WALLET_PROVIDER.lower()
    if kind == "stub":
        return StubWalletProvider({STUB_DEFAULT_ADDRESS: settings.STUB_WALLET_BALANCE_WEI})
    if kind == "jsonrpc":
        return JsonRpcWalletProvider(settings.WALLET_RPC_URL, settings.WALLET_RPC_TIMEOUT_SECONDS)
    if kind == "none":
        return UnavailableWalletProvider()
    raise ValueError(f"Unknown WALLET_PROVIDER: {settings.WALLET_PROVIDER!r}")


def get_wallet(request: Request) -> WalletProviderProtocol:
    """FastAPI dependency: the wallet provider owned by the app lifespan."""
    wallet: WalletProviderProtocol = request.app.state.wallet
    return wallet
