"""Key-value store collaborator contract.

Accessors consume a store only through ``get``, ``set`` and ``remove``.
``get`` returns None both for a missing key and for a key holding null;
accessors never need to tell the two apart.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.errors import UnsupportedTypeError
from core.types import StorableValue
from core.value_domain import is_storable_value


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal preferences store interface."""

    def get(self, key: str) -> StorableValue | None:
        """Return the stored value, or None when absent."""

    def set(self, key: str, value: StorableValue) -> None:
        """Store a value under key, replacing any previous value."""

    def remove(self, key: str) -> None:
        """Delete key; removing an absent key does nothing."""


def validate_storable_value(key: str, value: object) -> None:
    """Reject values outside the storable domain before persisting them.

    Raises:
        UnsupportedTypeError: If value is not storable.
    """
    if not is_storable_value(value):
        raise UnsupportedTypeError(
            f"Cannot store value of type {type(value).__name__} under key '{key}'. "
            "Stores accept str, int, float, bool, datetime, bytes, "
            "and acyclic lists or str-keyed dicts of those."
        )
