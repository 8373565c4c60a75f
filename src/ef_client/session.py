"""Client-side session persistence and login/logout.

The session is one JSON file with two fixed keys:
    ecofinds_token  - bearer token from /accounts or /accounts/session
    ecofinds_user   - the public profile returned alongside it
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger("ef.client")

TOKEN_KEY = "ecofinds_token"
USER_KEY = "ecofinds_user"


def describe_failure(resp: httpx.Response) -> str:
    """The envelope message of an error response, or the raw status."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    return str(body.get("message") or body.get("detail") or f"HTTP {resp.status_code}")


class LocalSessionCache:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> tuple[str, dict[str, Any]] | None:
        """(token, user) when both keys are present, else None."""
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable session file %s", self._path)
            return None
        token, user = data.get(TOKEN_KEY), data.get(USER_KEY)
        if not token or not isinstance(user, dict):
            return None
        return token, user

    def token(self) -> str | None:
        stored = self.load()
        return stored[0] if stored else None

    def save(self, token: str, user: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({TOKEN_KEY: token, USER_KEY: user}), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class SessionClient:
    """Login, register and logout against the API, persisting through the cache.

    ``user`` is restored from the cache on construction.
    """

    def __init__(
        self,
        base_url: str,
        cache: LocalSessionCache,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cache = cache
        self._client = client or httpx.AsyncClient(base_url=base_url)
        stored = cache.load()
        self.user: dict[str, Any] | None = stored[1] if stored else None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _authenticate(self, path: str, body: dict[str, str]) -> bool:
        try:
            resp = await self._client.post(path, json=body)
        except httpx.TransportError as exc:
            logger.error("POST %s failed: %s", path, exc)
            return False
        if resp.status_code >= 400:
            logger.error("POST %s rejected: %s", path, describe_failure(resp))
            return False
        data = resp.json()["data"]
        self.user = data["user"]
        self._cache.save(data["token"], data["user"])
        return True

    async def login(self, email: str, password: str) -> bool:
        return await self._authenticate(
            "/api/v1/accounts/session", {"email": email, "password": password}
        )

    async def register(self, name: str, email: str, password: str) -> bool:
        return await self._authenticate(
            "/api/v1/accounts", {"name": name, "email": email, "password": password}
        )

    def logout(self) -> None:
        self.user = None
        self._cache.clear()
