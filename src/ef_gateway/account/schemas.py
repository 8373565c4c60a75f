"""Pydantic request/response schemas for account endpoints.

All responses are wrapped in ApiResponse at the router layer. The password
hash has no field here, so it cannot leak through any response.
"""

from pydantic import BaseModel, EmailStr, Field

from src.ef_gateway.account.models import Account
from src.ef_gateway.auth.password import MIN_PASSWORD_LENGTH


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    avatar: str | None = None
    current_password: str | None = None
    new_password: str | None = Field(None, min_length=MIN_PASSWORD_LENGTH, max_length=128)


class UserInfo(BaseModel):
    """Own profile: everything except the password hash."""

    id: str
    name: str
    email: str
    avatar: str
    created_at: str

    @classmethod
    def from_domain(cls, a: Account) -> "UserInfo":
        return cls(
            id=a.id,
            name=a.name,
            email=a.email,
            avatar=a.avatar,
            created_at=a.created_at.isoformat() if a.created_at else "",
        )


class PublicUserInfo(BaseModel):
    """Another user's profile: no email."""

    id: str
    name: str
    avatar: str
    created_at: str

    @classmethod
    def from_domain(cls, a: Account) -> "PublicUserInfo":
        return cls(
            id=a.id,
            name=a.name,
            avatar=a.avatar,
            created_at=a.created_at.isoformat() if a.created_at else "",
        )


class AuthResponse(BaseModel):
    user: UserInfo
    token: str
    token_type: str = "Bearer"
    expires_in: int = 7 * 24 * 3600  # 7 days in seconds
