"""Unit tests for storable value domain classification."""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum

import pytest

from core.errors import UnsupportedTypeError
from core.value_domain import (
    ensure_raw_representable,
    ensure_storable,
    is_raw_representable,
    is_storable,
    is_storable_value,
    raw_codec_for,
)


class Language(Enum):
    ENGLISH = "en"
    FINNISH = "fi"


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Mixed(Enum):
    NAME = "name"
    COUNT = 3


class Point:
    raw_type = list[int]

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def to_raw(self) -> list[int]:
        return [self.x, self.y]

    @classmethod
    def from_raw(cls, raw: list[int]) -> "Point | None":
        if len(raw) != 2:
            return None
        return cls(raw[0], raw[1])


@pytest.mark.parametrize(
    "value_type",
    [str, int, float, bool, datetime, bytes, list, dict, list[int], dict[str, list[str]]],
)
def test_storable_types(value_type) -> None:
    """Primitive types and containers of them should be storable."""
    assert is_storable(value_type) and not is_raw_representable(value_type)


@pytest.mark.parametrize("value_type", [set, tuple, dict[int, str], list[object], type(None)])
def test_non_storable_types(value_type) -> None:
    """Types outside the plist domain should not be storable."""
    assert not is_storable(value_type)


def test_int_enum_is_raw_representable_not_storable() -> None:
    """IntEnum should be classified by its raw value, not as an int."""
    assert is_raw_representable(Priority) and not is_storable(Priority)


def test_enum_codec_maps_values() -> None:
    """Enum codec should expose the member value type and decode partially."""
    codec = raw_codec_for(Language)

    assert codec is not None
    assert codec.raw_type is str
    assert codec.to_raw(Language.FINNISH) == "fi"
    assert codec.from_raw("fi") is Language.FINNISH and codec.from_raw("de") is None


def test_enum_with_mixed_value_types_is_rejected() -> None:
    """Enum members must share one storable raw type."""
    with pytest.raises(UnsupportedTypeError):
        ensure_raw_representable(Mixed)


def test_protocol_class_is_raw_representable() -> None:
    """Classes implementing raw_type/to_raw/from_raw should be accepted."""
    codec = ensure_raw_representable(Point)

    assert codec.to_raw(Point(1, 2)) == [1, 2] and codec.from_raw([1]) is None


def test_ensure_storable_rejects_enum() -> None:
    """Primitive accessors should refuse raw-representable types."""
    with pytest.raises(UnsupportedTypeError, match="raw accessor"):
        ensure_storable(Language)


def test_is_storable_value_checks_nested_values() -> None:
    """Nested lists and maps should be validated element by element."""
    assert is_storable_value({"a": [1, 2.5, "x", b"\x00", datetime(2024, 1, 1)]})
    assert not is_storable_value({"a": [object()]})
    assert not is_storable_value({1: "int key"})
    assert not is_storable_value(Language.ENGLISH)


def test_is_storable_value_rejects_cycles() -> None:
    """Cyclic containers cannot be written to a plist store."""
    cyclic: list[object] = [1]
    cyclic.append(cyclic)

    assert not is_storable_value(cyclic)
