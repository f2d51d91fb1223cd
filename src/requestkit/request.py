"""Request description and the pure builder that materializes it.

A Request says what to call: path, method, query items, headers and an
optional payload. ``Request.build()`` turns it into a BuiltRequest with an
absolute URL, the final header mapping and the encoded body. Building does no
I/O and has no side effects beyond logging.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

import httpx

from requestkit import codec
from requestkit.errors import InvalidURLError
from requestkit.methods import ContentType, HTTPMethod

logger = logging.getLogger(__name__)

DEFAULT_HOST = "api.somehost.com"
DEFAULT_SCHEME = "https"

QueryItems = Sequence[tuple[str, str | None]]


class _NoPayload:
    def __repr__(self) -> str:
        return "NO_PAYLOAD"


# Marks a Request without a payload. None is a valid payload (JSON null).
NO_PAYLOAD: Any = _NoPayload()


@dataclass(frozen=True)
class BuiltRequest:
    """Fully materialized request, ready for a Transport.

    Attributes:
        url: Absolute URL including query string.
        method: Canonical verb ("GET", "POST", ...).
        headers: Read-only header mapping, one entry per header name.
        body: Encoded body, or None for bodyless requests.
    """

    url: httpx.URL
    method: str
    headers: Mapping[str, str]
    body: bytes | None = None

    @property
    def path(self) -> str:
        return self.url.path


@dataclass(frozen=True)
class Request:
    """Description of one outbound call.

    Attributes:
        path: URL path, must start with "/".
        method: HTTP method, GET by default.
        query_items: Ordered (key, value) pairs appended as the query string.
        headers: Caller headers. These win over configured defaults.
        host: Target host. Falls back to the configured host, then DEFAULT_HOST.
        payload: Value to encode as the body. Encoded lazily in build(), and
            only for methods that accept a body. NO_PAYLOAD means no body;
            None is encoded as JSON null.
    """

    path: str
    method: HTTPMethod = HTTPMethod.GET
    query_items: QueryItems | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    host: str | None = None
    payload: Any = NO_PAYLOAD

    def with_payload(self, payload: Any) -> Request:
        return replace(self, payload=payload)

    def without_payload(self) -> Request:
        return replace(self, payload=NO_PAYLOAD)

    @property
    def has_payload(self) -> bool:
        return self.payload is not NO_PAYLOAD

    def url(self, *, default_host: str | None = None) -> httpx.URL:
        """Build the absolute URL for this request.

        Raises:
            InvalidURLError: If host and path do not form a valid URL.
        """
        host = self.host or default_host or DEFAULT_HOST
        params = list(self.query_items) if self.query_items else None
        try:
            # Parsed as an authority so "host:port" works
            base = httpx.URL(f"{DEFAULT_SCHEME}://{host}")
            return base.copy_with(path=self.path, params=params)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidURLError(
                f"Cannot build URL: {e}",
                path=self.path,
                host=host,
            ) from e

    def build(
        self,
        *,
        default_headers: Mapping[str, str] | None = None,
        default_host: str | None = None,
    ) -> BuiltRequest:
        """Materialize this request.

        Header precedence, lowest to highest: ``default_headers``, the
        request's own headers, ``Accept: application/json``, then
        ``Content-Type`` for body-bearing methods.

        Raises:
            InvalidURLError: If the URL cannot be built.
            PayloadEncodingError: If the payload cannot be encoded.
        """
        url = self.url(default_host=default_host)

        layers: list[Mapping[str, str]] = [
            default_headers or {},
            self.headers,
            {"Accept": ContentType.JSON.value},
        ]
        if self.method.content_type is not None:
            layers.append({"Content-Type": self.method.content_type.value})

        body = None
        if self.has_payload:
            if self.method.accepts_body:
                body = codec.encode(self.payload)
            else:
                logger.warning(f"Dropping payload for bodyless {self.method.verb} {self.path}")

        return BuiltRequest(
            url=url,
            method=self.method.verb,
            headers=MappingProxyType(merge_headers(*layers)),
            body=body,
        )


def merge_headers(*layers: Mapping[str, str]) -> dict[str, str]:
    """Merge header mappings, later layers winning.

    Keys are compared case-insensitively. The spelling of the last writer is
    kept.
    """
    merged: dict[str, str] = {}
    spelling: dict[str, str] = {}
    for layer in layers:
        for key, value in layer.items():
            previous = spelling.get(key.lower())
            if previous is not None:
                del merged[previous]
            spelling[key.lower()] = key
            merged[key] = value
    return merged
