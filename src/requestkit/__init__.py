"""requestkit: typed JSON API requests over an injectable transport."""

__version__ = "0.1.0"

from requestkit.client import Client
from requestkit.codec import decode, encode
from requestkit.config import ClientConfig
from requestkit.errors import (
    BodyNotAllowedError,
    BuildError,
    ConfigError,
    DecodeError,
    HTTPStatusError,
    InvalidURLError,
    PayloadEncodingError,
    RequestKitError,
    TimeoutError,
    TransportError,
)
from requestkit.methods import ContentType, HTTPMethod
from requestkit.request import DEFAULT_HOST, NO_PAYLOAD, BuiltRequest, Request, merge_headers
from requestkit.transport import HTTPXTransport, Response, Transport

__all__ = [
    # Core
    "Client",
    "ClientConfig",
    "Request",
    "BuiltRequest",
    "Response",
    "HTTPMethod",
    "ContentType",
    "DEFAULT_HOST",
    "NO_PAYLOAD",
    "merge_headers",
    # Transport
    "Transport",
    "HTTPXTransport",
    # Codec
    "encode",
    "decode",
    # Errors
    "RequestKitError",
    "BuildError",
    "InvalidURLError",
    "PayloadEncodingError",
    "BodyNotAllowedError",
    "TransportError",
    "TimeoutError",
    "HTTPStatusError",
    "DecodeError",
    "ConfigError",
]
