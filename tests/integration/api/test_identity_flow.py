import pytest
from httpx import AsyncClient

from src.adapter.repositories.session_repository import SessionRepository
from tests.utils.auth_client import bearer, set_cookies


@pytest.mark.asyncio
async def test_register_activate_login_logout(client: AsyncClient, db_session, test_data):
    """Full identity lifecycle

    Register alice -> activate -> log in -> protected call carries role user
    -> log out -> the refresh session is no longer valid
    """
    register = await client.post("/auth/register", json=test_data.get_copy("register_alice"))
    assert register.status_code == 201
    account_id = register.json()["account_id"]

    activate = await client.post("/auth/activate", json={"account_id": account_id})
    assert activate.status_code == 200

    login = await client.post("/auth/login", json=test_data.get_copy("login_alice"))
    assert login.status_code == 200
    cookies = set_cookies(login)
    access_token = cookies["access_token"]["value"]
    refresh_token = cookies["refresh_token"]["value"]

    ledger = SessionRepository(db_session)
    assert await ledger.find_valid(refresh_token) is not None

    me = await client.get("/auth/me", headers=bearer(access_token))
    assert me.status_code == 200
    assert me.json()["account_id"] == account_id
    assert me.json()["role"] == "user"

    logout = await client.post(
        "/auth/logout", json={"refresh_token": refresh_token}, headers=bearer(access_token)
    )
    assert logout.status_code == 200

    assert await ledger.find_valid(refresh_token) is None
