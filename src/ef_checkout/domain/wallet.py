"""Wallet capability: the only contract checkout relies on.

Implementations live in ef_checkout.infrastructure.wallet_providers.
Amounts are integer wei. Implementations raise WalletUnavailableError when
no provider is reachable and WalletTransferRejectedError when a transfer is
refused (user rejection, on-chain failure).
"""

from typing import Protocol


class WalletProviderProtocol(Protocol):
    async def get_accounts(self) -> list[str]: ...

    async def get_balance(self, address: str) -> int: ...

    async def send_value(self, from_address: str, to_address: str, amount_wei: int) -> str: ...
