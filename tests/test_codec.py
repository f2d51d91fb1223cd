"""Tests for the JSON codec boundary."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from requestkit.codec import decode, encode
from requestkit.errors import DecodeError, PayloadEncodingError


class User(BaseModel):
    name: str


class Plain:
    def __init__(self, value: int):
        self.value = value


@dataclass
class Story:
    id: int


class TestEncode:
    def test_dataclass_is_compact(self):
        assert encode(Story(id=1337)) == b'{"id":1337}'

    def test_dict_keeps_key_order(self):
        assert encode({"b": 1, "a": [1, 2]}) == b'{"b":1,"a":[1,2]}'

    def test_unknown_type_raises(self):
        with pytest.raises(PayloadEncodingError, match="Failed to encode"):
            encode(object())


class TestDecode:
    def test_decodes_model(self):
        user = decode(b'{"name": "Test"}', User)

        assert user == User(name="Test")

    def test_decodes_builtin_types(self):
        assert decode(b"[1, 2, 3]", list[int]) == [1, 2, 3]

    def test_invalid_json_raises(self):
        with pytest.raises(DecodeError) as exc_info:
            decode(b"not json", User)

        assert exc_info.value.target == "User"

    def test_schema_mismatch_raises(self):
        with pytest.raises(DecodeError):
            decode(b'{"title": "no name"}', User)

    def test_unsupported_type_raises(self):
        with pytest.raises(DecodeError) as exc_info:
            decode(b"{}", Plain)

        assert exc_info.value.target == "Plain"
