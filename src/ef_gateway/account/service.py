"""Account service: register, login, profile read/update.

Stateless: instantiate once, reuse across requests. The store is passed in
on every call by the router, which gets it from Depends(get_store).
"""

from typing import Any

from src.ef_common.errors import (
    AccountNotFoundError,
    CurrentPasswordRequiredError,
    EmailExistsError,
    IncorrectPasswordError,
    InvalidCredentialsError,
)
from src.ef_common.id_generator import generate_id
from src.ef_gateway.account.models import DEFAULT_AVATAR, Account
from src.ef_gateway.account.repository import AccountRepositoryProtocol
from src.ef_gateway.account.schemas import UpdateProfileRequest
from src.ef_gateway.auth.jwt_handler import create_access_token
from src.ef_gateway.auth.password import hash_password, verify_password


class AccountService:
    async def register(
        self,
        store: AccountRepositoryProtocol,
        name: str,
        email: str,
        password: str,
    ) -> tuple[Account, str]:
        """Create an account and return it with a fresh bearer token.

        The store's email index is the final uniqueness guard; the pre-check
        only avoids hashing a password for a request that will be rejected.
        """
        if await store.get_account_by_email(email) is not None:
            raise EmailExistsError()

        account = await store.create_account(
            Account(
                id=generate_id(),
                name=name,
                email=email,
                password_hash=hash_password(password),
                avatar=DEFAULT_AVATAR,
            )
        )
        return account, create_access_token(account.id, account.email)

    async def login(
        self,
        store: AccountRepositoryProtocol,
        email: str,
        password: str,
    ) -> tuple[Account, str]:
        """Authenticate and return (account, token).

        Note: "unknown email" and "wrong password" both raise InvalidCredentialsError
        on purpose, to prevent email enumeration.
        """
        account = await store.get_account_by_email(email)
        if account is None or not verify_password(password, account.password_hash):
            raise InvalidCredentialsError()
        return account, create_access_token(account.id, account.email)

    async def get_account(self, store: AccountRepositoryProtocol, account_id: str) -> Account:
        account = await store.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def update_profile(
        self,
        store: AccountRepositoryProtocol,
        account_id: str,
        req: UpdateProfileRequest,
    ) -> Account:
        account = await self.get_account(store, account_id)

        updates: dict[str, Any] = {}
        if req.name:
            updates["name"] = req.name
        if req.email and req.email.lower() != account.email.lower():
            existing = await store.get_account_by_email(req.email)
            if existing is not None and existing.id != account_id:
                raise EmailExistsError()
            updates["email"] = req.email
        if req.avatar:
            updates["avatar"] = req.avatar

        if req.new_password:
            if not req.current_password:
                raise CurrentPasswordRequiredError()
            if not verify_password(req.current_password, account.password_hash):
                raise IncorrectPasswordError()
            updates["password_hash"] = hash_password(req.new_password)

        if updates and not await store.update_account(account_id, **updates):
            raise AccountNotFoundError(account_id)
        return await self.get_account(store, account_id)
