"""JWT token creation and verification.

One bearer token per login/registration: HS256, 7-day validity, carrying
the account id (``sub``) and email. There is no refresh token and no
revocation; a token stays valid until it expires.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.ef_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_TOKEN_EXPIRE = timedelta(days=settings.JWT_EXPIRE_DAYS)


def create_access_token(account_id: str, email: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": account_id,
        "email": email,
        "type": "access",
        "iat": now,
        "exp": now + _TOKEN_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def token_lifetime_seconds() -> int:
    return int(_TOKEN_EXPIRE.total_seconds())


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: signature invalid, token expired, or wrong type.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != "access" or not payload.get("sub"):
        raise InvalidCredentialsError()
    return payload
