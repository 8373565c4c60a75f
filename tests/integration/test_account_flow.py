"""Integration tests for registration, login and profile endpoints."""

from datetime import timedelta
from unittest.mock import patch

from httpx import AsyncClient

from src.ef_gateway.auth.jwt_handler import create_access_token


class TestRegister:
    async def test_register_returns_user_and_token(self, client: AsyncClient) -> None:
        body = {"name": "Ada", "email": "ada@example.com", "password": "secret123"}
        resp = await client.post("/api/v1/accounts", json=body)
        assert resp.status_code == 200
        payload = resp.json()
        assert payload["code"] == 0
        user = payload["data"]["user"]
        assert user["name"] == "Ada"
        assert user["email"] == "ada@example.com"
        assert user["avatar"] == "/placeholder.svg"
        assert payload["data"]["token"]
        assert payload["data"]["expires_in"] == 7 * 24 * 3600
        assert "password_hash" not in resp.text

    async def test_request_id_matches_header(self, client: AsyncClient) -> None:
        body = {"name": "Ada", "email": "ada@example.com", "password": "secret123"}
        resp = await client.post("/api/v1/accounts", json=body)
        assert resp.json()["request_id"] == resp.headers["X-Request-ID"]

    async def test_duplicate_email_conflicts(self, client: AsyncClient, register) -> None:
        first = await register(email="dup@example.com")
        resp = await client.post(
            "/api/v1/accounts",
            json={"name": "Other", "email": "DUP@example.com", "password": "another1"},
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 1001
        assert resp.json()["data"] is None

        # Existing account still logs in with its original password.
        login = await client.post(
            "/api/v1/accounts/session",
            json={"email": "dup@example.com", "password": first["password"]},
        )
        assert login.status_code == 200

    async def test_short_password_rejected(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/accounts",
            json={"name": "Ada", "email": "ada@example.com", "password": "12345"},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 9001
        assert "password" in resp.json()["message"]

    async def test_invalid_email_rejected(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/accounts",
            json={"name": "Ada", "email": "not-an-email", "password": "secret123"},
        )
        assert resp.status_code == 400


class TestLogin:
    async def test_login_success(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.post(
            "/api/v1/accounts/session",
            json={"email": account["user"]["email"], "password": account["password"]},
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["user"]["id"] == account["user"]["id"]
        assert resp.json()["data"]["token"]

    async def test_wrong_password(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.post(
            "/api/v1/accounts/session",
            json={"email": account["user"]["email"], "password": "wrong-password"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1002

    async def test_unknown_email_same_error(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/accounts/session",
            json={"email": "nobody@example.com", "password": "secret123"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1002


class TestOwnProfile:
    async def test_get_me(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.get("/api/v1/accounts/me", headers=account["headers"])
        assert resp.status_code == 200
        assert resp.json()["data"]["user"]["email"] == account["user"]["email"]

    async def test_missing_token(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/accounts/me")
        assert resp.status_code == 401

    async def test_garbage_token(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/accounts/me", headers={"Authorization": "Bearer not.a.token"}
        )
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Bearer"

    async def test_expired_token(self, client: AsyncClient, register) -> None:
        account = await register()
        with patch(
            "src.ef_gateway.auth.jwt_handler._TOKEN_EXPIRE",
            timedelta(seconds=-1),
        ):
            token = create_access_token(account["user"]["id"], account["user"]["email"])
        resp = await client.get(
            "/api/v1/accounts/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 401

    async def test_token_for_deleted_account(self, client: AsyncClient, store, register) -> None:
        account = await register()
        await store.delete_account(account["user"]["id"])
        resp = await client.get("/api/v1/accounts/me", headers=account["headers"])
        assert resp.status_code == 404
        assert resp.json()["code"] == 1003

    async def test_update_name_and_avatar(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.put(
            "/api/v1/accounts/me",
            json={"name": "New Name", "avatar": "/me.png"},
            headers=account["headers"],
        )
        assert resp.status_code == 200
        user = resp.json()["data"]["user"]
        assert user["name"] == "New Name"
        assert user["avatar"] == "/me.png"
        assert user["email"] == account["user"]["email"]

    async def test_change_email_to_taken_email(self, client: AsyncClient, register) -> None:
        other = await register()
        account = await register()
        resp = await client.put(
            "/api/v1/accounts/me",
            json={"email": other["user"]["email"]},
            headers=account["headers"],
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 1001

    async def test_change_password(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.put(
            "/api/v1/accounts/me",
            json={"current_password": account["password"], "new_password": "brand-new-pw"},
            headers=account["headers"],
        )
        assert resp.status_code == 200

        email = account["user"]["email"]
        old = await client.post(
            "/api/v1/accounts/session", json={"email": email, "password": account["password"]}
        )
        new = await client.post(
            "/api/v1/accounts/session", json={"email": email, "password": "brand-new-pw"}
        )
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_change_password_needs_current(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.put(
            "/api/v1/accounts/me",
            json={"new_password": "brand-new-pw"},
            headers=account["headers"],
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 1005

    async def test_change_password_wrong_current(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.put(
            "/api/v1/accounts/me",
            json={"current_password": "not-it", "new_password": "brand-new-pw"},
            headers=account["headers"],
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 1004


class TestPublicProfile:
    async def test_public_profile_hides_email(self, client: AsyncClient, register) -> None:
        account = await register()
        resp = await client.get(f"/api/v1/accounts/{account['user']['id']}")
        assert resp.status_code == 200
        user = resp.json()["data"]["user"]
        assert user["name"] == account["user"]["name"]
        assert "email" not in user
        assert "password_hash" not in resp.text

    async def test_unknown_account(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/accounts/does-not-exist")
        assert resp.status_code == 404
        assert resp.json()["code"] == 1003


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
