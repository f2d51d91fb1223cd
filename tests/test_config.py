"""Tests for client configuration."""

from __future__ import annotations

import pytest

from requestkit import __version__
from requestkit.config import DEFAULT_TIMEOUT, ClientConfig
from requestkit.errors import ConfigError
from requestkit.request import DEFAULT_HOST, Request


class TestClientConfig:
    """Tests for ClientConfig dataclass."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.host == DEFAULT_HOST
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.follow_redirects is True
        assert config.default_headers == {"User-Agent": f"requestkit/{__version__}"}

    def test_with_headers_merges_and_copies(self):
        config = ClientConfig()

        updated = config.with_headers({"user-agent": "custom/2.0", "X-Env": "test"})

        assert updated.default_headers == {"user-agent": "custom/2.0", "X-Env": "test"}
        assert config.default_headers == {"User-Agent": f"requestkit/{__version__}"}

    def test_is_frozen(self):
        config = ClientConfig()

        with pytest.raises(AttributeError):
            config.host = "other"  # type: ignore[misc]


class TestFromEnv:
    """Tests for ClientConfig.from_env."""

    def test_from_env_parses_all_fields(self):
        env = {
            "REQUESTKIT_HOST": "api.example.com",
            "REQUESTKIT_TIMEOUT": "2.5",
            "REQUESTKIT_USER_AGENT": "my-app/1.0",
            "REQUESTKIT_AUTH_TOKEN": "secret-token",
        }

        config = ClientConfig.from_env(env)

        assert config.host == "api.example.com"
        assert config.timeout == 2.5
        assert config.default_headers == {
            "User-Agent": "my-app/1.0",
            "Authorization": "Bearer secret-token",
        }

    def test_from_env_host_with_port_builds(self):
        config = ClientConfig.from_env({"REQUESTKIT_HOST": "localhost:8000"})

        built = Request(path="/users").build(default_host=config.host)

        assert config.host == "localhost:8000"
        assert str(built.url) == "https://localhost:8000/users"

    def test_from_env_handles_missing_fields(self):
        config = ClientConfig.from_env({})

        assert config == ClientConfig()

    def test_from_env_ignores_unrelated_vars(self):
        config = ClientConfig.from_env({"HOST": "ignored", "TIMEOUT": "x"})

        assert config.host == DEFAULT_HOST

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_from_env_rejects_bad_timeout(self, value: str):
        with pytest.raises(ConfigError) as exc_info:
            ClientConfig.from_env({"REQUESTKIT_TIMEOUT": value})

        assert exc_info.value.key == "REQUESTKIT_TIMEOUT"
        assert exc_info.value.value == value
