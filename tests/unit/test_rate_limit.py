"""Tests for rate limiter construction (src/atelier/core/rate_limit.py)."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from src.atelier.core.rate_limit import create_limiter, get_rate_limit_key, limiter

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_request() -> MagicMock:
    request = MagicMock(spec=Request)
    request.headers = {"X-Forwarded-For": "10.0.0.1"}
    request.client = MagicMock()
    request.client.host = "192.168.1.100"
    return request


def test_key_is_client_ip(mock_request: MagicMock) -> None:
    assert get_rate_limit_key(mock_request) == "192.168.1.100"


def test_limiter_disabled_in_testing() -> None:
    assert limiter.enabled is False


def test_limiter_enabled_outside_testing() -> None:
    settings = MagicMock()
    settings.app_env = "development"
    settings.redis_url = None

    with patch("src.atelier.core.rate_limit.get_settings", return_value=settings):
        assert create_limiter().enabled is True
