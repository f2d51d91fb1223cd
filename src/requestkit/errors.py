"""Typed exceptions for requestkit.

All library errors inherit from RequestKitError. There are two tiers:

- BuildError: the request could not be materialized (bad URL, payload that
  cannot be encoded, body on a bodyless method). Raised before any I/O.
- TransportError / HTTPStatusError / DecodeError: the call was attempted and
  failed, or its result could not be interpreted.
"""

from __future__ import annotations

from typing import Any


class RequestKitError(Exception):
    """Base exception for all requestkit errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class BuildError(RequestKitError):
    """A Request could not be turned into a BuiltRequest."""


class InvalidURLError(BuildError):
    """Host and path do not form a valid URL."""

    def __init__(self, message: str, *, path: str | None = None, host: str | None = None):
        context = {"path": path, "host": host}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.path = path
        self.host = host


class PayloadEncodingError(BuildError):
    """Payload could not be serialized to JSON."""

    def __init__(self, message: str, *, payload_type: str | None = None):
        context = {"payload_type": payload_type} if payload_type else {}
        super().__init__(message, context=context)
        self.payload_type = payload_type


class BodyNotAllowedError(BuildError):
    """A payload was attached to a method that does not carry a body."""

    def __init__(self, message: str, *, method: str):
        super().__init__(message, context={"method": method})
        self.method = method


class TransportError(RequestKitError):
    """The transport failed to deliver the request."""

    def __init__(self, message: str, *, url: str | None = None, method: str | None = None):
        context = {"url": url, "method": method}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.url = url
        self.method = method


class TimeoutError(TransportError):
    """The transport timed out."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        method: str | None = None,
        timeout_seconds: float | None = None,
    ):
        super().__init__(message, url=url, method=method)
        if timeout_seconds:
            self.context["timeout_seconds"] = timeout_seconds
        self.timeout_seconds = timeout_seconds


class HTTPStatusError(RequestKitError):
    """Response carried a non-2xx status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        url: str | None = None,
        method: str | None = None,
    ):
        context = {"status_code": status_code, "url": url, "method": method}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.status_code = status_code
        self.url = url
        self.method = method


class DecodeError(RequestKitError):
    """Response body could not be decoded into the requested type."""

    def __init__(self, message: str, *, target: str | None = None):
        context = {"target": target} if target else {}
        super().__init__(message, context=context)
        self.target = target


class ConfigError(RequestKitError):
    """Configuration value is missing or malformed."""

    def __init__(self, message: str, *, key: str | None = None, value: Any = None):
        context: dict[str, Any] = {}
        if key:
            context["key"] = key
        if value is not None:
            # Truncate long values for readability
            str_val = str(value)
            context["value"] = str_val[:100] + "..." if len(str_val) > 100 else str_val
        super().__init__(message, context=context)
        self.key = key
        self.value = value
