"""FastAPI dependency: get_current_account.

Usage in any protected router:
    from src.ef_gateway.auth.dependencies import get_current_account

    @router.get("/protected")
    async def protected(account: Account = Depends(get_current_account)):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.ef_common.errors import InvalidCredentialsError
from src.ef_gateway.account.models import Account
from src.ef_gateway.auth.jwt_handler import decode_token
from src.ef_store.memory import InMemoryStore, get_store

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/accounts/session")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_account_id(token: str = Depends(oauth2_scheme)) -> str:
    """Validate the Bearer token and return its account id without a store lookup.

    Raises HTTP 401 if the token is missing, invalid, or expired.
    """
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    return payload["sub"]


async def get_current_account(
    account_id: str = Depends(get_current_account_id),
    store: InMemoryStore = Depends(get_store),
) -> Account:
    """Resolve the token's account. A token for a deleted account is rejected with 401."""
    account = await store.get_account(account_id)
    if account is None:
        raise _CREDENTIALS_EXCEPTION
    return account
