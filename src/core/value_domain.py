"""Storable value domain classification.

This module decides whether a declared type can live in a plist-style
preferences store directly (storable), through a raw value
(raw-representable), or not at all. Accessors classify their type once,
at construction, so an unsupported declaration fails before first use.

A type is storable when it is one of str, int, float, bool, datetime,
bytes, or a list / str-keyed dict whose element type is storable. A type
is raw-representable when it is an Enum whose members share one storable
value type, or when it implements the RawRepresentable protocol. The two
classes never overlap: IntEnum and StrEnum are raw-representable even
though they subclass int and str.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, ClassVar, Protocol, get_args, get_origin, runtime_checkable

from core.errors import UnsupportedTypeError

STORABLE_SCALAR_TYPES: tuple[type, ...] = (str, int, float, bool, datetime, bytes)


@runtime_checkable
class RawRepresentable(Protocol):
    """Protocol for wrapper types persisted through a storable raw value.

    Implementers declare ``raw_type``, convert with ``to_raw()`` and rebuild
    with the ``from_raw(raw)`` classmethod, which returns None when the raw
    value does not correspond to any instance.
    """

    raw_type: ClassVar[Any]

    def to_raw(self) -> Any:
        """Return the storable raw value for this instance."""

    @classmethod
    def from_raw(cls, raw: Any) -> Any:
        """Rebuild an instance from a raw value, or return None."""


@dataclass(frozen=True)
class RawCodec:
    """Conversion pair between a raw-representable type and its raw type.

    Attributes:
        value_type: The rich declared type.
        raw_type: Storable type of the raw representation.
        to_raw: Total conversion to the raw value.
        from_raw: Partial conversion back; returns None for unknown raws.
    """

    value_type: Any
    raw_type: Any
    to_raw: Callable[[Any], Any]
    from_raw: Callable[[Any], Any]


def is_storable(value_type: Any) -> bool:
    """Return whether a declared type is in the storable domain."""
    if _is_enum_type(value_type):
        return False
    if value_type in STORABLE_SCALAR_TYPES or value_type in (list, dict):
        return True
    origin = get_origin(value_type)
    args = get_args(value_type)
    if origin is list:
        return len(args) == 1 and is_storable(args[0])
    if origin is dict:
        return len(args) == 2 and args[0] is str and is_storable(args[1])
    return False


def is_raw_representable(value_type: Any) -> bool:
    """Return whether a declared type maps onto a storable raw value."""
    return raw_codec_for(value_type) is not None


def raw_codec_for(value_type: Any) -> RawCodec | None:
    """Build the raw conversion pair for a type, when it has one.

    Args:
        value_type: Declared property type.

    Returns:
        Codec for raw-representable types, None for every other type.
    """
    if not _is_plain_class(value_type):
        return None
    if issubclass(value_type, Enum):
        return _enum_codec(value_type)
    if is_storable(value_type):
        return None
    if not all(hasattr(value_type, name) for name in ("raw_type", "to_raw", "from_raw")):
        return None
    raw_type = value_type.raw_type
    if not is_storable(raw_type):
        return None
    return RawCodec(
        value_type=value_type,
        raw_type=raw_type,
        to_raw=lambda value: value.to_raw(),
        from_raw=value_type.from_raw,
    )


def ensure_storable(value_type: Any) -> None:
    """Validate a type for the primitive accessor variants.

    Raises:
        UnsupportedTypeError: If the type is not storable.
    """
    if is_storable(value_type):
        return
    hint = ""
    if is_raw_representable(value_type):
        hint = " It is raw-representable: use a raw accessor instead."
    raise UnsupportedTypeError(
        f"Type {_type_name(value_type)} cannot be stored directly. "
        "Use str, int, float, bool, datetime, bytes, or list/dict of those."
        f"{hint}"
    )


def ensure_raw_representable(value_type: Any) -> RawCodec:
    """Validate a type for the raw accessor variants.

    Returns:
        The raw conversion pair for the type.

    Raises:
        UnsupportedTypeError: If the type has no storable raw form.
    """
    codec = raw_codec_for(value_type)
    if codec is None:
        raise UnsupportedTypeError(
            f"Type {_type_name(value_type)} is not raw-representable. "
            "Use an Enum with values of one storable type, or implement "
            "raw_type, to_raw() and from_raw()."
        )
    return codec


def is_storable_value(value: object) -> bool:
    """Return whether a concrete value may be written to a store.

    Containers are checked recursively; cyclic containers are rejected.
    Enum members are rejected so raw values are always converted first.
    """
    return _is_storable_value(value, set())


def _is_storable_value(value: object, active: set[int]) -> bool:
    if isinstance(value, Enum):
        return False
    if isinstance(value, (*STORABLE_SCALAR_TYPES, bytearray)):
        return True
    if isinstance(value, (list, tuple)):
        children = list(value)
    elif isinstance(value, dict):
        if not all(isinstance(item_key, str) for item_key in value):
            return False
        children = list(value.values())
    else:
        return False
    marker = id(value)
    if marker in active:
        return False
    active.add(marker)
    try:
        return all(_is_storable_value(child, active) for child in children)
    finally:
        active.discard(marker)


def _enum_codec(enum_type: type[Enum]) -> RawCodec | None:
    members = list(enum_type)
    if not members:
        return None
    value_types = {type(member.value) for member in members}
    if len(value_types) != 1:
        return None
    raw_type = value_types.pop()
    if not is_storable(raw_type):
        return None

    def from_raw(raw: Any) -> Any:
        try:
            return enum_type(raw)
        except ValueError:
            return None

    return RawCodec(
        value_type=enum_type,
        raw_type=raw_type,
        to_raw=lambda member: member.value,
        from_raw=from_raw,
    )


def _is_enum_type(value_type: Any) -> bool:
    return _is_plain_class(value_type) and issubclass(value_type, Enum)


def _is_plain_class(value_type: Any) -> bool:
    # Parameterized generics such as list[int] are not classes.
    return isinstance(value_type, type) and get_origin(value_type) is None


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__qualname__", repr(value_type))
