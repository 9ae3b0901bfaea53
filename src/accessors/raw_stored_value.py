"""Accessors for raw-representable types.

Values are persisted as their raw form (an Enum member's value, or the
result of ``to_raw()``) and rebuilt on read. A raw value with no matching
instance, such as a stale enum tag, reads as the default.
"""

from __future__ import annotations

import copy
from typing import Any, Generic, TypeVar

from accessors.coercion import CoercionError, coerce
from accessors.store_slot import StoreSlot, log_default_fallback
from core.errors import UnsupportedTypeError
from core.property_key import PropertyKey
from core.types import MISSING, Missing, StorableValue
from core.value_domain import RawCodec, ensure_raw_representable
from store.key_value_store import KeyValueStore

T = TypeVar("T")


class RawStoredValue(Generic[T]):
    """Non-optional accessor for a raw-representable type.

    Args:
        key: Store key; None or "" defers the key until ``bind_key``.
        default: Value returned while the store holds nothing decodable.
        value_type: Declared type; inferred from the default when omitted.
        initial: Value written at construction and restored by
            ``reset_to_initial``.
        store: Backing store; the process default store when omitted.
        read_only: Ignore property writes.
        strict_keys: Reject rebinding a bound key to a different string.
    """

    def __init__(
        self,
        key: PropertyKey | str | None,
        default: T,
        *,
        value_type: Any = None,
        initial: T | Missing = MISSING,
        store: KeyValueStore | None = None,
        read_only: bool = False,
        strict_keys: bool | None = None,
    ) -> None:
        self.value_type = value_type if value_type is not None else type(default)
        self.codec = ensure_raw_representable(self.value_type)
        _encode(self.codec, default, "default")
        self.default: T = default
        if initial is not MISSING:
            _encode(self.codec, initial, "initial")
        self.initial = initial
        self._slot = StoreSlot(key, store, read_only, strict_keys)
        if self._slot.key.is_bound:
            self._apply_initial()

    @property
    def key(self) -> PropertyKey:
        return self._slot.key

    @property
    def store(self) -> KeyValueStore:
        return self._slot.store

    @property
    def read_only(self) -> bool:
        return self._slot.read_only

    @property
    def has_initial(self) -> bool:
        return self.initial is not MISSING

    @property
    def value(self) -> T:
        return self.read()

    @value.setter
    def value(self, new_value: T) -> None:
        self.write(new_value)

    def read(self) -> T:
        """Return the decoded stored value, or the default.

        Raises:
            KeyNotBoundError: If the key is still deferred.
        """
        raw = self._slot.fetch()
        if raw is None:
            return copy.deepcopy(self.default)
        decoded = _decode(self.codec, raw, self._slot.key.resolve())
        return copy.deepcopy(self.default) if decoded is None else decoded

    def write(self, new_value: T) -> None:
        """Store the raw form of a new value.

        Raises:
            KeyNotBoundError: If the key is still deferred.
            UnsupportedTypeError: If the value is not of the declared type.
        """
        if self._slot.writes_ignored():
            return
        self._store(new_value)

    def bind_key(self, key: str) -> bool:
        """Bind a deferred key, writing the initial value on first bind."""
        bound = self._slot.key.bind(key)
        if bound:
            self._apply_initial()
        return bound

    def reset_to_initial(self) -> None:
        """Restore the initial value, or remove the entry when there is none."""
        if not self._slot.key.is_bound:
            return
        if self.has_initial:
            self._store(self.initial)
        else:
            self._slot.delete()

    def remove_from_store(self) -> None:
        """Delete the store entry so reads fall back to the default."""
        self._slot.delete_if_bound()

    def _store(self, new_value: Any) -> None:
        self._slot.put(_encode(self.codec, new_value, "value"))

    def _apply_initial(self) -> None:
        if self.has_initial:
            self._store(self.initial)

    def __repr__(self) -> str:
        return f"RawStoredValue(key={self._slot.key!r}, default={self.default!r})"


class OptionalRawStoredValue(Generic[T]):
    """Optional accessor for a raw-representable type.

    Args:
        key: Store key; None or "" defers the key until ``bind_key``.
        value_type: Declared raw-representable type.
        default: Value returned while the store holds nothing decodable.
        initial: Value written at construction and restored by
            ``reset_to_initial``; an initial of None removes the entry.
        store: Backing store; the process default store when omitted.
        read_only: Ignore property writes.
        strict_keys: Reject rebinding a bound key to a different string.
    """

    def __init__(
        self,
        key: PropertyKey | str | None,
        value_type: Any,
        *,
        default: T | None = None,
        initial: T | None | Missing = MISSING,
        store: KeyValueStore | None = None,
        read_only: bool = False,
        strict_keys: bool | None = None,
    ) -> None:
        self.value_type = value_type
        self.codec = ensure_raw_representable(value_type)
        if default is not None:
            _encode(self.codec, default, "default")
        self.default = default
        if initial is not MISSING and initial is not None:
            _encode(self.codec, initial, "initial")
        self.initial = initial
        self._slot = StoreSlot(key, store, read_only, strict_keys)
        if self._slot.key.is_bound:
            self._apply_initial()

    @property
    def key(self) -> PropertyKey:
        return self._slot.key

    @property
    def store(self) -> KeyValueStore:
        return self._slot.store

    @property
    def read_only(self) -> bool:
        return self._slot.read_only

    @property
    def has_initial(self) -> bool:
        return self.initial is not MISSING

    @property
    def value(self) -> T | None:
        return self.read()

    @value.setter
    def value(self, new_value: T | None) -> None:
        self.write(new_value)

    def read(self) -> T | None:
        """Return the decoded stored value, or the default (possibly None)."""
        raw = self._slot.fetch()
        if raw is None:
            return copy.deepcopy(self.default)
        decoded = _decode(self.codec, raw, self._slot.key.resolve())
        return copy.deepcopy(self.default) if decoded is None else decoded

    def write(self, new_value: T | None) -> None:
        """Store the raw form of a value; None deletes the entry."""
        if self._slot.writes_ignored():
            return
        self._store(new_value)

    def bind_key(self, key: str) -> bool:
        """Bind a deferred key, writing the initial value on first bind."""
        bound = self._slot.key.bind(key)
        if bound:
            self._apply_initial()
        return bound

    def reset_to_initial(self) -> None:
        """Restore the initial value, or remove the entry when there is none."""
        if not self._slot.key.is_bound:
            return
        if self.has_initial:
            self._store(self.initial)
        else:
            self._slot.delete()

    def remove_from_store(self) -> None:
        """Delete the store entry so reads fall back to the default."""
        self._slot.delete_if_bound()

    def _store(self, new_value: Any) -> None:
        if new_value is None:
            self._slot.delete()
            return
        self._slot.put(_encode(self.codec, new_value, "value"))

    def _apply_initial(self) -> None:
        if self.has_initial:
            self._store(self.initial)

    def __repr__(self) -> str:
        return f"OptionalRawStoredValue(key={self._slot.key!r}, default={self.default!r})"


def _encode(codec: RawCodec, candidate: Any, role: str) -> StorableValue:
    """Convert a value to its raw form, rejecting values of other types."""
    if not isinstance(candidate, codec.value_type):
        raise UnsupportedTypeError(
            f"Invalid {role} {candidate!r}: expected an instance of "
            f"{codec.value_type.__name__}."
        )
    raw = codec.to_raw(candidate)
    try:
        return coerce(raw, codec.raw_type)
    except CoercionError as error:
        raise UnsupportedTypeError(
            f"Invalid {role} {candidate!r}: raw value {raw!r} is not storable ({error})."
        ) from error


def _decode(codec: RawCodec, raw: StorableValue, key: str) -> Any:
    """Rebuild a value from a raw store entry; None when it cannot be rebuilt."""
    try:
        raw_value = coerce(raw, codec.raw_type)
    except CoercionError:
        log_default_fallback(key, "not_coercible")
        return None
    decoded = codec.from_raw(raw_value)
    if decoded is None:
        log_default_fallback(key, "unknown_raw_value")
    return decoded
