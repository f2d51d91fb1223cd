"""Transport abstraction and the httpx-backed implementation.

A Transport sends one BuiltRequest and returns one Response, or raises one
TransportError. It never retries. Non-2xx responses are ordinary values.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar, runtime_checkable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from requestkit import codec
from requestkit.errors import HTTPStatusError, TimeoutError, TransportError
from requestkit.request import BuiltRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SENSITIVE_QUERY_KEYS = ("token", "key", "secret", "password", "signature")


@dataclass(frozen=True)
class Response:
    """Raw response from a Transport.

    Unpacks as ``data, response = result`` to mirror the (data, response)
    pair a transport produces.

    Attributes:
        data: Raw response body.
        status_code: HTTP status code (200, 404, etc.)
        headers: Response headers.
        url: URL the response came from, if known.
    """

    data: bytes
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    url: str | None = None

    def __iter__(self) -> Iterator[Any]:
        yield self.data
        yield self

    @property
    def ok(self) -> bool:
        """True if response has 2xx status code."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    @property
    def content_type(self) -> str:
        """Content-Type header value, looked up case-insensitively."""
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return ""

    def json(self) -> Any:
        """Parse the body as untyped JSON.

        Raises:
            DecodeError: If the body is not valid JSON.
        """
        return codec.decode(self.data, Any)

    def decode(self, type_: type[T]) -> T:
        """Decode the body into ``type_`` using the JSON codec."""
        return codec.decode(self.data, type_)

    def raise_for_status(self) -> Response:
        """Raise HTTPStatusError unless the status is 2xx."""
        if not self.ok:
            raise HTTPStatusError(
                f"Unexpected status {self.status_code}",
                status_code=self.status_code,
                url=self.url,
            )
        return self


@runtime_checkable
class Transport(Protocol):
    """Anything that can deliver a BuiltRequest."""

    async def send(self, request: BuiltRequest) -> Response:
        """Send the request and return its response.

        Raises:
            TransportError: If the request could not be delivered.
        """
        ...


class HTTPXTransport:
    """Transport backed by an ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def send(self, request: BuiltRequest) -> Response:
        log_url = _redact_url(str(request.url))
        logger.debug(f"HTTP {request.method} {log_url}")

        started = time.perf_counter()
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.body,
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request timed out: {request.method} {log_url}",
                url=log_url,
                method=request.method,
                timeout_seconds=self._client.timeout.read,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(
                f"Request failed: {e}",
                url=log_url,
                method=request.method,
            ) from e

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.debug(f"HTTP {request.method} {log_url} -> {response.status_code} in {elapsed_ms}ms")

        return Response(
            data=response.content,
            status_code=response.status_code,
            headers=dict(response.headers),
            url=str(response.url),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HTTPXTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _redact_url(url: str) -> str:
    """Redact sensitive query values for logging."""
    parts = urlsplit(url)
    if not parts.query:
        return url

    pairs = parse_qsl(parts.query, keep_blank_values=True)
    if not any(_is_sensitive(k) for k, _ in pairs):
        return url

    query = [(k, "***" if _is_sensitive(k) else v) for k, v in pairs]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


def _is_sensitive(key: str) -> bool:
    return any(s in key.lower() for s in _SENSITIVE_QUERY_KEYS)
