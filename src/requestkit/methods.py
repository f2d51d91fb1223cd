"""HTTP verbs and the content types they carry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ContentType(str, Enum):
    """Body encodings a request can declare."""

    JSON = "application/json"


_BODY_VERBS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class HTTPMethod:
    """One of GET, POST, PUT, PATCH or DELETE.

    Body-bearing verbs (POST, PUT, PATCH) carry the ContentType used for the
    Content-Type header. GET and DELETE never carry one.

    Use the constants and constructors rather than instantiating directly:

        HTTPMethod.GET
        HTTPMethod.post()              # application/json
        HTTPMethod.update()            # PATCH
        HTTPMethod.DELETE
    """

    verb: str
    content_type: ContentType | None = None

    GET: ClassVar[HTTPMethod]
    DELETE: ClassVar[HTTPMethod]

    def __post_init__(self) -> None:
        if self.verb not in _BODY_VERBS | {"GET", "DELETE"}:
            raise ValueError(f"Unsupported HTTP method: {self.verb!r}")
        if self.verb in _BODY_VERBS and self.content_type is None:
            raise ValueError(f"{self.verb} requires a content type")
        if self.verb not in _BODY_VERBS and self.content_type is not None:
            raise ValueError(f"{self.verb} cannot declare a content type")

    @classmethod
    def post(cls, content_type: ContentType = ContentType.JSON) -> HTTPMethod:
        return cls("POST", content_type)

    @classmethod
    def put(cls, content_type: ContentType = ContentType.JSON) -> HTTPMethod:
        return cls("PUT", content_type)

    @classmethod
    def update(cls, content_type: ContentType = ContentType.JSON) -> HTTPMethod:
        """PATCH request."""
        return cls("PATCH", content_type)

    patch = update

    @classmethod
    def parse(cls, verb: str) -> HTTPMethod:
        """Parse a verb string (case-insensitive).

        Body-bearing verbs default to JSON.

        Raises:
            ValueError: If the verb is not supported.
        """
        normalized = verb.strip().upper()
        if normalized in _BODY_VERBS:
            return cls(normalized, ContentType.JSON)
        return cls(normalized)

    @property
    def accepts_body(self) -> bool:
        """True for POST, PUT and PATCH."""
        return self.verb in _BODY_VERBS

    def __str__(self) -> str:
        return self.verb


HTTPMethod.GET = HTTPMethod("GET")
HTTPMethod.DELETE = HTTPMethod("DELETE")
