"""Account repository Protocol: the store calls the account service relies on."""

from typing import Any, Protocol

from src.ef_gateway.account.models import Account


class AccountRepositoryProtocol(Protocol):
    async def create_account(self, account: Account) -> Account: ...

    async def get_account(self, account_id: str) -> Account | None: ...

    async def get_account_by_email(self, email: str) -> Account | None: ...

    async def update_account(self, account_id: str, **updates: Any) -> bool: ...
