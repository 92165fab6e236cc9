"""Sign-up, sign-in and session endpoints against a real database."""

import pytest
from httpx import AsyncClient

from tests.factories import DEFAULT_TEST_PASSWORD

pytestmark = pytest.mark.integration


async def test_register_opens_session_with_starting_balance(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "new@example.com", "password": DEFAULT_TEST_PASSWORD},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "client"
    assert body["dashboard_path"] == "/dashboard/client"
    assert body["token_type"] == "bearer"
    assert "session" in response.cookies

    me = await client.get(
        "/api/v1/profiles/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["points_balance"] == 100
    assert me.json()["email"] == "new@example.com"


async def test_register_duplicate_email(client: AsyncClient, register_user) -> None:
    await register_user(email="dup@example.com")

    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "dup@example.com", "password": DEFAULT_TEST_PASSWORD},
    )

    assert response.status_code == 409
    assert response.json()["kind"] == "conflict"


async def test_register_validates_payload(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register", json={"email": "not-an-email", "password": "x"}
    )
    assert response.status_code == 422


async def test_login(client: AsyncClient, register_user) -> None:
    account = await register_user("designer")

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": account.email, "password": DEFAULT_TEST_PASSWORD},
    )

    assert response.status_code == 200
    assert response.json()["role"] == "designer"
    assert response.json()["dashboard_path"] == "/dashboard/designer"


async def test_login_wrong_password(client: AsyncClient, register_user) -> None:
    account = await register_user()

    response = await client.post(
        "/api/v1/auth/login", json={"email": account.email, "password": "wrong-password"}
    )

    assert response.status_code == 401
    body = response.json()
    assert body["kind"] == "auth"
    assert body["detail"] == "Invalid login credentials"


async def test_session_info(client: AsyncClient, register_user) -> None:
    account = await register_user("project_manager")

    response = await client.get("/api/v1/auth/session", headers=account.headers)

    assert response.status_code == 200
    assert response.json() == {
        "user_id": account.user_id,
        "email": account.email,
        "role": "project_manager",
        "dashboard_path": "/dashboard/projectManager",
    }


async def test_session_cookie_authenticates(client: AsyncClient, register_user) -> None:
    account = await register_user()
    client.cookies.set("session", account.token)

    response = await client.get("/api/v1/profiles/me")

    assert response.status_code == 200
    assert response.json()["id"] == account.user_id


async def test_logout_revokes_token(client: AsyncClient, register_user) -> None:
    account = await register_user()

    response = await client.post("/api/v1/auth/logout", headers=account.headers)
    assert response.status_code == 204

    response = await client.get("/api/v1/profiles/me", headers=account.headers)
    assert response.status_code == 401


async def test_protected_api_requires_session(client: AsyncClient) -> None:
    response = await client.get("/api/v1/projects")

    assert response.status_code == 401
    assert response.json()["kind"] == "auth"
