"""Testing utilities for deterministic transports.

Provides a Transport that never touches the network:
- StubTransport: replays queued responses or errors, records what was sent
- make_response(): build a Response with a JSON or raw body

Usage:
    from requestkit import Client, Request
    from requestkit.testing import StubTransport, make_response

    async def test_fetch_user():
        transport = StubTransport([make_response(200, json={"name": "Bob"})])
        client = Client(transport)

        response = await client.fetch(Request(path="/users/1337"))

        assert response.decode(User).name == "Bob"
        assert transport.requests[0].path == "/users/1337"

    async def test_connectivity_failure():
        transport = StubTransport([TransportError("Connection refused")])
        ...
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from requestkit import codec
from requestkit.request import BuiltRequest
from requestkit.transport import Response


def make_response(
    status_code: int = 200,
    *,
    json: Any = None,
    content: bytes | str | None = None,
    headers: Mapping[str, str] | None = None,
    url: str | None = None,
) -> Response:
    """Create a Response for tests.

    ``json`` is encoded with the codec and sets a JSON content-type header.
    ``content`` is used as the raw body otherwise.
    """
    response_headers = dict(headers or {})
    if json is not None:
        data = codec.encode(json)
        response_headers.setdefault("content-type", "application/json")
    elif isinstance(content, str):
        data = content.encode("utf-8")
    else:
        data = content or b""

    return Response(data=data, status_code=status_code, headers=response_headers, url=url)


class StubTransport:
    """Transport that replays queued results in order.

    Each queued item is either a Response to return or an exception to
    raise. When the queue is empty, ``handler`` is called if given,
    otherwise an empty ``200 {}`` response is returned.

    Attributes:
        requests: Every BuiltRequest received, in order.
        call_count: Number of send() calls.
    """

    def __init__(
        self,
        responses: Iterable[Response | Exception] | None = None,
        *,
        handler: Callable[[BuiltRequest], Response] | None = None,
    ):
        self.responses = list(responses or [])
        self.handler = handler
        self.requests: list[BuiltRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def send(self, request: BuiltRequest) -> Response:
        self.requests.append(request)

        if self.responses:
            result = self.responses.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        if self.handler is not None:
            return self.handler(request)

        return make_response(200, json={}, url=str(request.url))
