from http.cookies import SimpleCookie
from typing import Dict, Tuple

from httpx import AsyncClient, Response


def set_cookies(response: Response) -> Dict[str, Dict[str, str]]:
    """
    Parse every Set-Cookie header of a response.

    Returns {cookie name: {"value": ..., "path": ..., "max-age": ...,
    "httponly": ..., "secure": ..., "samesite": ...}}
    """
    parsed = {}
    for header in response.headers.get_list("set-cookie"):
        cookie = SimpleCookie()
        cookie.load(header)
        for name, morsel in cookie.items():
            attributes = {key: morsel[key] for key in morsel.keys() if morsel[key]}
            attributes["value"] = morsel.value
            parsed[name] = attributes
    return parsed


async def register_and_activate(
    client: AsyncClient, username: str, password: str, role: str = "user"
) -> str:
    response = await client.post(
        "/auth/register", json={"username": username, "password": password, "role": role}
    )
    assert response.status_code == 201, response.text
    account_id = response.json()["account_id"]

    response = await client.post("/auth/activate", json={"account_id": account_id})
    assert response.status_code == 200, response.text
    return account_id


async def login(client: AsyncClient, username: str, password: str) -> Tuple[str, str]:
    """Log in and return (access_token, refresh_token) taken from the cookies"""
    response = await client.post(
        "/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    cookies = set_cookies(response)
    return cookies["access_token"]["value"], cookies["refresh_token"]["value"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
