"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database and HTTP client fixtures are in tests/integration/conftest.py.
"""

import os

# Set test configuration before any app imports; APP_ENV=testing disables rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef0123456789")
# Cheapest Argon2 parameters the library accepts
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8")
# Object storage runs on moto; botocore still wants credentials to sign with
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Iterator
from typing import Any

import boto3
import pytest
from fakeredis import aioredis as fakeredis_aio
from moto import mock_aws
from redis.asyncio import Redis

from src.atelier.core import redis as redis_core
from src.atelier.core.config import get_settings
from src.atelier.core.storage import ObjectStorage

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def s3_client() -> Iterator[Any]:
    """boto3 client on moto's in-process S3, with the projects bucket created."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket="projects")
        yield client


@pytest.fixture
def storage(s3_client: Any) -> ObjectStorage:
    return ObjectStorage("projects", region_name="us-east-1")


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client.

    Patches both src.atelier.core.redis and src.atelier.core.cache so the
    fake is used everywhere.
    """
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.atelier.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.atelier.core.cache.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.atelier.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.atelier.core.cache.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()
