"""Caller-facing client: fetch and send over an injected Transport."""

from __future__ import annotations

from typing import Any

import httpx

from requestkit.config import ClientConfig
from requestkit.errors import BodyNotAllowedError
from requestkit.request import BuiltRequest, Request
from requestkit.transport import HTTPXTransport, Response, Transport


class Client:
    """Builds requests and hands them to a Transport.

    The client holds no mutable state. Each call builds one request, makes
    one transport call and returns its result unchanged: non-2xx responses
    come back as values and transport errors propagate as raised.

    Example:
        async with Client() as client:
            response = await client.fetch(Request(path="/users/1337"))
            user = response.decode(User)

        # Tests inject a transport instead
        client = Client(StubTransport([make_response(404)]))
    """

    def __init__(self, transport: Transport | None = None, *, config: ClientConfig | None = None):
        self.config = config or ClientConfig()
        self._owns_transport = transport is None
        if transport is None:
            transport = HTTPXTransport(
                httpx.AsyncClient(
                    timeout=self.config.timeout,
                    follow_redirects=self.config.follow_redirects,
                )
            )
        self.transport = transport

    def build(self, request: Request) -> BuiltRequest:
        """Build ``request`` with this client's configured defaults."""
        return request.build(
            default_headers=self.config.default_headers,
            default_host=self.config.host,
        )

    async def fetch(self, request: Request) -> Response:
        """Send a bodyless request and return the raw response.

        Raises:
            BuildError: If the request cannot be built.
            TransportError: If the transport fails.
        """
        built = self.build(request.without_payload())
        return await self.transport.send(built)

    async def send(self, payload: Any, request: Request) -> Response:
        """Send ``payload`` as the body of ``request``.

        Raises:
            BodyNotAllowedError: If the request method does not carry a body.
            BuildError: If the request cannot be built.
            TransportError: If the transport fails.
        """
        if not request.method.accepts_body:
            raise BodyNotAllowedError(
                f"Cannot send a payload with {request.method.verb}",
                method=request.method.verb,
            )
        built = self.build(request.with_payload(payload))
        return await self.transport.send(built)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self.transport, HTTPXTransport):
            await self.transport.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
