"""Pytest fixtures for requestkit tests."""

from __future__ import annotations

import pytest

from requestkit.client import Client
from requestkit.config import ClientConfig
from requestkit.testing import StubTransport


@pytest.fixture
def stub_transport() -> StubTransport:
    """Transport returning 200 {} for every call."""
    return StubTransport()


@pytest.fixture
def client(stub_transport: StubTransport) -> Client:
    """Client wired to the stub transport with a fixed config."""
    config = ClientConfig(
        host="api.example.com",
        default_headers={"User-Agent": "requestkit-tests"},
    )
    return Client(stub_transport, config=config)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer test-token"}
