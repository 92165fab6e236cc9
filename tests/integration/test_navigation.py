"""Page navigation gate through the full middleware stack."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_root_redirects_to_login(client: AsyncClient) -> None:
    response = await client.get("/")

    assert response.status_code == 307
    assert response.headers["location"] == "/login"


@pytest.mark.parametrize(
    "path", ["/dashboard", "/dashboard/client", "/dashboard/designer/projects"]
)
async def test_anonymous_dashboard_redirects_to_login(client: AsyncClient, path: str) -> None:
    response = await client.get(path)

    assert response.status_code == 307
    assert response.headers["location"] == "/login"


async def test_anonymous_sees_login_and_register(client: AsyncClient) -> None:
    login = await client.get("/login")
    register = await client.get("/register")

    assert login.status_code == 200
    assert login.json()["register_path"] == "/register"
    assert register.status_code == 200
    assert register.json()["roles"] == ["client", "project_manager", "designer"]


@pytest.mark.parametrize(
    ("role", "dashboard"),
    [
        ("client", "/dashboard/client"),
        ("designer", "/dashboard/designer"),
        ("project_manager", "/dashboard/projectManager"),
    ],
)
async def test_signed_in_login_redirects_to_dashboard(
    client: AsyncClient, register_user, role: str, dashboard: str
) -> None:
    account = await register_user(role)

    response = await client.get("/login", headers=account.headers)

    assert response.status_code == 307
    assert response.headers["location"] == dashboard


@pytest.mark.parametrize(
    ("role", "foreign", "own"),
    [
        ("client", "/dashboard/designer", "/dashboard/client"),
        ("client", "/dashboard/projectManager", "/dashboard/client"),
        ("designer", "/dashboard/client", "/dashboard/designer"),
        ("project_manager", "/dashboard/designer", "/dashboard/projectManager"),
        ("project_manager", "/dashboard", "/dashboard/projectManager"),
    ],
)
async def test_foreign_dashboard_redirects_to_own(
    client: AsyncClient, register_user, role: str, foreign: str, own: str
) -> None:
    account = await register_user(role)

    response = await client.get(foreign, headers=account.headers)

    assert response.status_code == 307
    assert response.headers["location"] == own


async def test_client_dashboard(client: AsyncClient, register_user) -> None:
    account = await register_user("client")

    response = await client.get("/dashboard/client", headers=account.headers)

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == "client"
    assert body["profile"]["points_balance"] == 100
    assert body["projects"] == []
    assert len(body["offerings"]) == 3


async def test_project_manager_dashboard_lists_designers(
    client: AsyncClient, register_user
) -> None:
    pm = await register_user("project_manager")
    designer = await register_user("designer")

    response = await client.get("/dashboard/projectManager", headers=pm.headers)

    assert response.status_code == 200
    designers = response.json()["designers"]
    assert [d["id"] for d in designers] == [designer.user_id]
    assert designers[0]["assigned_projects"] == []


async def test_invalid_token_treated_as_anonymous(client: AsyncClient) -> None:
    response = await client.get(
        "/dashboard/client", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 307
    assert response.headers["location"] == "/login"


async def test_signed_out_session_treated_as_anonymous(
    client: AsyncClient, register_user
) -> None:
    account = await register_user("client")
    await client.post("/api/v1/auth/logout", headers=account.headers)

    response = await client.get("/dashboard/client", headers=account.headers)

    assert response.status_code == 307
    assert response.headers["location"] == "/login"


async def test_api_routes_are_not_gated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/offerings")

    assert response.status_code == 200
    assert response.json()[0] == {"name": "Diseño de marca", "credits": 10}
