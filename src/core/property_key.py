"""Write-once property key cell.

A key is either fixed to a non-empty string or deferred until the owning
object knows it (for example a key built from an id assigned in
``__init__``). A deferred key may be bound exactly once; later binds are
ignored, or rejected when the key is strict.
"""

from __future__ import annotations

from core.errors import KeyAlreadyBoundError, KeyNotBoundError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class PropertyKey:
    """Fixed-or-deferred store key with one-shot binding."""

    __slots__ = ("_raw_key", "_strict")

    def __init__(self, key: str | None = None, *, strict: bool = False) -> None:
        self._raw_key = key or None
        self._strict = strict

    @classmethod
    def fixed(cls, key: str, *, strict: bool = False) -> "PropertyKey":
        """Create a fixed key; an empty string yields a deferred key."""
        return cls(key, strict=strict)

    @classmethod
    def deferred(cls, *, strict: bool = False) -> "PropertyKey":
        """Create a key that must be bound before first use."""
        return cls(None, strict=strict)

    @property
    def raw_key(self) -> str | None:
        """The fixed key string, or None while deferred."""
        return self._raw_key

    @property
    def is_bound(self) -> bool:
        return self._raw_key is not None

    @property
    def strict(self) -> bool:
        return self._strict

    def bind(self, key: str) -> bool:
        """Fix a deferred key.

        Args:
            key: Key string to bind. An empty string leaves the key deferred.

        Returns:
            True when this call fixed the key, False when it was ignored.

        Raises:
            KeyAlreadyBoundError: If strict and already fixed to another key.
        """
        if self._raw_key is None:
            if not key:
                return False
            self._raw_key = key
            _LOGGER.debug("key_bound", key=key)
            return True
        if self._strict and key != self._raw_key:
            raise KeyAlreadyBoundError(
                f"Key is already bound to '{self._raw_key}' and cannot be rebound to '{key}'. "
                "Bind deferred keys once, before first use."
            )
        _LOGGER.debug("key_rebind_ignored", key=self._raw_key, requested_key=key)
        return False

    def resolve(self) -> str:
        """Return the fixed key string.

        Raises:
            KeyNotBoundError: If the key is still deferred.
        """
        if self._raw_key is None:
            raise KeyNotBoundError(
                "Property key is not bound yet. "
                "Call bind_key() on the accessor before reading or writing it."
            )
        return self._raw_key

    def __repr__(self) -> str:
        if self._raw_key is None:
            return "PropertyKey.deferred()"
        return f"PropertyKey.fixed({self._raw_key!r})"


def as_property_key(key: "PropertyKey | str | None", *, strict: bool = False) -> PropertyKey:
    """Return the key cell an accessor will own.

    A PropertyKey instance is taken as is; strings and None build a new cell.
    """
    if isinstance(key, PropertyKey):
        return key
    return PropertyKey(key, strict=strict)
