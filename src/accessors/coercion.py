"""Coercion of raw store values into declared types.

Reads never raise on a mismatching raw value; the accessor falls back to
its default instead. Writes run the same rules to reject values outside
the declared type before they reach the store.
"""

from __future__ import annotations

import copy
from datetime import datetime
from enum import Enum
from typing import Any, get_args, get_origin

from core.value_domain import is_storable_value


class CoercionError(ValueError):
    """Raised when a raw value does not fit the declared type."""


def coerce(raw: Any, value_type: Any) -> Any:
    """Convert a raw store value to the declared storable type.

    Args:
        raw: Value read from, or about to be written to, a store.
        value_type: Declared storable type.

    Returns:
        The value as an instance of value_type. Containers are copied.

    Raises:
        CoercionError: If raw does not fit value_type.
    """
    if isinstance(raw, Enum):
        raise CoercionError(f"enum member {raw!r} is not a raw store value")
    if value_type is bool:
        if isinstance(raw, bool):
            return raw
        raise _mismatch(raw, value_type)
    if value_type is int:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return int(raw)
        raise _mismatch(raw, value_type)
    if value_type is float:
        # Integral values widen, matching number bridging in preference stores.
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return float(raw)
        raise _mismatch(raw, value_type)
    if value_type is str:
        if isinstance(raw, str):
            return str(raw)
        raise _mismatch(raw, value_type)
    if value_type is bytes:
        if isinstance(raw, (bytes, bytearray)):
            return bytes(raw)
        raise _mismatch(raw, value_type)
    if value_type is datetime:
        if isinstance(raw, datetime):
            return raw
        raise _mismatch(raw, value_type)
    if value_type is list or get_origin(value_type) is list:
        return _coerce_list(raw, value_type)
    if value_type is dict or get_origin(value_type) is dict:
        return _coerce_dict(raw, value_type)
    raise CoercionError(f"unsupported declared type {value_type!r}")


def is_coercible(raw: Any, value_type: Any) -> bool:
    """Return whether raw fits the declared type."""
    try:
        coerce(raw, value_type)
    except CoercionError:
        return False
    return True


def _coerce_list(raw: Any, value_type: Any) -> list[Any]:
    if not isinstance(raw, (list, tuple)):
        raise _mismatch(raw, value_type)
    args = get_args(value_type)
    if not args:
        if not is_storable_value(raw):
            raise _mismatch(raw, value_type)
        return copy.deepcopy(list(raw))
    return [coerce(item, args[0]) for item in raw]


def _coerce_dict(raw: Any, value_type: Any) -> dict[str, Any]:
    if not isinstance(raw, dict) or not all(isinstance(item_key, str) for item_key in raw):
        raise _mismatch(raw, value_type)
    args = get_args(value_type)
    if not args:
        if not is_storable_value(raw):
            raise _mismatch(raw, value_type)
        return copy.deepcopy(dict(raw))
    return {item_key: coerce(item, args[1]) for item_key, item in raw.items()}


def _mismatch(raw: Any, value_type: Any) -> CoercionError:
    type_name = getattr(value_type, "__name__", repr(value_type))
    return CoercionError(f"{type(raw).__name__} value does not fit {type_name}")
