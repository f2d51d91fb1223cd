"""JSON codec boundary.

Payload encoding and response decoding go through pydantic so that models,
dataclasses and plain containers all serialize the same way.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from requestkit.errors import DecodeError, PayloadEncodingError

T = TypeVar("T")


def encode(payload: Any) -> bytes:
    """Encode a payload as compact JSON bytes.

    Raises:
        PayloadEncodingError: If the payload is not JSON-serializable.
    """
    try:
        return to_json(payload)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise PayloadEncodingError(
            f"Failed to encode payload: {e}",
            payload_type=type(payload).__name__,
        ) from e


def decode(data: bytes | str, type_: type[T]) -> T:
    """Decode JSON bytes into ``type_``.

    Raises:
        DecodeError: If the data is not valid JSON, does not match the type,
            or the type is not supported by pydantic.
    """
    target = getattr(type_, "__name__", repr(type_))
    try:
        adapter = TypeAdapter(type_)
    except PydanticSchemaGenerationError as e:
        raise DecodeError(f"Cannot decode into unsupported type: {e}", target=target) from e
    try:
        return adapter.validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"Failed to decode response body: {e}", target=target) from e
