import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.adapter.repositories.credential_repository import CredentialRepository
from src.domain.entities import Account, Credential


@pytest.mark.asyncio
async def test_successful_register(client: AsyncClient, db_session, test_data):
    """Registering creates an unactivated account with one active credential

    Given no account named alice exists
    When I register alice with role user
    Then I receive 201 with the new account id
    And no token cookie is set
    """
    response = await client.post("/auth/register", json=test_data.get_copy("register_alice"))

    assert response.status_code == 201
    data = response.json()
    assert "account_id" in data
    assert "set-cookie" not in response.headers

    account = (
        await db_session.exec(select(Account).where(Account.username == "alice"))
    ).one()
    assert str(account.id) == data["account_id"]
    assert account.active is True
    assert account.activated is False

    credentials = (
        await db_session.exec(select(Credential).where(Credential.account_id == account.id))
    ).all()
    assert len(credentials) == 1
    assert credentials[0].active is True
    assert credentials[0].password_hash != "pw123"


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, test_data):
    payload = test_data.get_copy("register_alice")
    first = await client.post("/auth/register", json=payload)
    assert first.status_code == 201

    payload["role"] = "admin"
    second = await client.post("/auth/register", json=payload)

    assert second.status_code == 409
    assert second.json()["error"]["code"] == "ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_unknown_role(client: AsyncClient):
    response = await client.post(
        "/auth/register", json={"username": "alice", "password": "pw123", "role": "owner"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_is_atomic(client: AsyncClient, db_session, monkeypatch, test_data):
    """A failing credential write leaves no account behind"""

    async def failing_create(self, credential):
        raise SQLAlchemyError("simulated credential write failure")

    monkeypatch.setattr(CredentialRepository, "create", failing_create)

    response = await client.post("/auth/register", json=test_data.get_copy("register_alice"))

    assert response.status_code == 500
    assert response.json()["error"] == {
        "code": "INTERNAL",
        "message": "Internal server error",
    }

    accounts = (
        await db_session.exec(select(Account).where(Account.username == "alice"))
    ).all()
    assert accounts == []
