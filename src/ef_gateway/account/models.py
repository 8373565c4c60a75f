"""Account domain model: pure dataclass, no framework dependency."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_AVATAR = "/placeholder.svg"


@dataclass
class Account:
    id: str
    name: str
    email: str
    password_hash: str
    avatar: str = DEFAULT_AVATAR
    created_at: datetime | None = None
