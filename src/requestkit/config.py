"""Client configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from requestkit import __version__
from requestkit.errors import ConfigError
from requestkit.request import DEFAULT_HOST, merge_headers

ENV_PREFIX = "REQUESTKIT_"

DEFAULT_USER_AGENT = f"requestkit/{__version__}"
DEFAULT_TIMEOUT = 30.0


def _default_headers() -> Mapping[str, str]:
    return MappingProxyType({"User-Agent": DEFAULT_USER_AGENT})


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every request a Client sends.

    Attributes:
        host: Host used when a Request does not name one.
        default_headers: Headers applied to every request. Request headers
            override them.
        timeout: Transport timeout in seconds.
        follow_redirects: Whether the default transport follows redirects.
    """

    host: str = DEFAULT_HOST
    default_headers: Mapping[str, str] = field(default_factory=_default_headers)
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True

    def with_headers(self, headers: Mapping[str, str]) -> ClientConfig:
        """Return a copy with ``headers`` merged over the current defaults."""
        merged = merge_headers(self.default_headers, headers)
        return replace(self, default_headers=MappingProxyType(merged))

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> ClientConfig:
        """Build from REQUESTKIT_* environment variables.

        Args:
            env: Environment variables mapping (typically os.environ).

        Returns:
            ClientConfig with values from REQUESTKIT_HOST, REQUESTKIT_TIMEOUT,
            REQUESTKIT_USER_AGENT and REQUESTKIT_AUTH_TOKEN. Missing variables
            keep their defaults.

        Raises:
            ConfigError: If REQUESTKIT_TIMEOUT is not a positive number.
        """
        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get(f"{ENV_PREFIX}TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(
                    "Timeout must be a number",
                    key=f"{ENV_PREFIX}TIMEOUT",
                    value=raw_timeout,
                ) from None
            if timeout <= 0:
                raise ConfigError(
                    "Timeout must be positive",
                    key=f"{ENV_PREFIX}TIMEOUT",
                    value=raw_timeout,
                )

        headers = {"User-Agent": env.get(f"{ENV_PREFIX}USER_AGENT") or DEFAULT_USER_AGENT}
        token = env.get(f"{ENV_PREFIX}AUTH_TOKEN")
        if token:
            headers["Authorization"] = f"Bearer {token}"

        return cls(
            host=env.get(f"{ENV_PREFIX}HOST") or DEFAULT_HOST,
            default_headers=MappingProxyType(headers),
            timeout=timeout,
        )
