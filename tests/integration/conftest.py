"""Integration test fixtures for database and HTTP client operations.

The app runs against an in-memory SQLite database shared through a
StaticPool, so the request sessions and the navigation middleware all see
the same data.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.atelier import models  # noqa: F401 - registers tables on the metadata
from src.atelier.core import db
from src.atelier.core import redis as redis_core
from src.atelier.core.storage import ObjectStorage, get_storage
from src.atelier.main import create_app
from tests.factories import DEFAULT_TEST_PASSWORD


@dataclass
class Account:
    """A registered user as seen by the API."""

    user_id: str
    email: str
    role: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Redis clients are bound to the event loop of the test that created them."""
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables, installed as the app's engine."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    db.set_engine(test_engine)
    yield test_engine
    db.set_engine(None)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(
    engine: AsyncEngine, storage: ObjectStorage, mock_redis: Redis
) -> AsyncGenerator[AsyncClient]:
    app = create_app()
    app.dependency_overrides[get_storage] = lambda: storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


RegisterUser = Callable[..., Awaitable[Account]]


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register an account through the API and return its bearer credentials.

    The session cookie is dropped so each request authenticates explicitly.
    """
    counter = 0

    async def _register(role: str = "client", email: str | None = None) -> Account:
        nonlocal counter
        counter += 1
        email = email or f"{role}_{counter}@example.com"
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": DEFAULT_TEST_PASSWORD, "role": role},
        )
        assert response.status_code == 201, response.text
        client.cookies.clear()
        body: dict[str, Any] = response.json()
        return Account(
            user_id=body["user_id"],
            email=email,
            role=body["role"],
            token=body["access_token"],
        )

    return _register
