"""Pytest configuration and shared fixtures."""

import json
import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from zaif.client.rest import RestClient
from zaif.client.transport import HttpTransport
from zaif.models.request import RawResponse
from zaif.utils.config import ClientConfig


@pytest.fixture
def make_response() -> Callable[..., RawResponse]:
    """Factory for raw transport responses."""

    def _make(payload: Any = None, status: int = 200, reason: str = "OK", body=None):
        if body is None:
            body = json.dumps(payload)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return RawResponse(status=status, reason=reason, body=body)

    return _make


@pytest.fixture
def fake_transport() -> MagicMock:
    """Transport double whose get/post return canned responses."""
    transport = MagicMock(spec=HttpTransport)
    transport.get = AsyncMock()
    transport.post = AsyncMock()
    return transport


@pytest.fixture
def client(fake_transport: MagicMock) -> RestClient:
    """Client with key/secret credentials, no cool-down and a fake transport."""
    return RestClient(
        api_key="test_key",
        api_secret="test_secret",
        cool_down=False,
        transport=fake_transport,
    )


@pytest.fixture
def anonymous_client(fake_transport: MagicMock) -> RestClient:
    """Client without credentials."""
    return RestClient(cool_down=False, transport=fake_transport)


@pytest.fixture
def client_config() -> ClientConfig:
    """Default client configuration."""
    return ClientConfig()


@pytest.fixture
def skip_if_not_live():
    """Skip test unless live network tests are enabled."""
    if not os.getenv("ZAIF_LIVE_TESTS"):
        pytest.skip("Set ZAIF_LIVE_TESTS=1 to run live tests")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "live: mark test as requiring live connection")


def pytest_collection_modifyitems(config, items):
    """Mark tests in the live integration module automatically."""
    for item in items:
        if "integration_live" in item.nodeid:
            item.add_marker(pytest.mark.live)
