from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from src.app.services.token_issuer import TokenIssuer, TokenSettings
from src.domain.entities import Account, AccountRole
from tests.utils.auth_client import bearer, login, register_and_activate


@pytest.mark.asyncio
async def test_me_with_bearer_token(client: AsyncClient):
    account_id = await register_and_activate(client, "alice", "pw123", role="admin")
    access_token, _ = await login(client, "alice", "pw123")

    response = await client.get("/auth/me", headers=bearer(access_token))

    assert response.status_code == 200
    assert response.json() == {
        "account_id": account_id,
        "username": "alice",
        "role": "admin",
    }


@pytest.mark.asyncio
async def test_me_with_cookie(client: AsyncClient):
    await register_and_activate(client, "alice", "pw123")
    access_token, _ = await login(client, "alice", "pw123")

    response = await client.get("/auth/me", headers={"Cookie": f"access_token={access_token}"})

    assert response.status_code == 200
    assert response.json()["role"] == "user"


@pytest.mark.asyncio
async def test_me_without_token(client: AsyncClient):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_me_with_expired_token(client: AsyncClient):
    issuer = TokenIssuer(TokenSettings.from_config(ApplicationConfig))
    account = Account(username="ghost", role=AccountRole.user)
    issued_at = datetime.now(UTC) - timedelta(
        minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES + 1
    )
    expired = issuer.create_access_token(account, now=issued_at)

    response = await client.get("/auth/me", headers=bearer(expired))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_with_tampered_token(client: AsyncClient):
    await register_and_activate(client, "alice", "pw123")
    access_token, _ = await login(client, "alice", "pw123")
    header, payload, signature = access_token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    response = await client.get("/auth/me", headers=bearer(tampered))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_public_operations_need_no_token(client: AsyncClient):
    """Public operations are reachable without any token"""
    response = await client.post(
        "/auth/register", json={"username": "dave", "password": "pw", "role": "user"}
    )

    assert response.status_code == 201
