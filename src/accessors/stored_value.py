"""Accessors for values of the storable domain.

``StoredValue`` always yields a value: the stored one, or its default.
``OptionalStoredValue`` may yield None; writing None deletes the key so
"key absent" is the only stored form of "no value".
"""

from __future__ import annotations

import copy
from typing import Any, Generic, TypeVar

from accessors.coercion import CoercionError, coerce
from accessors.store_slot import StoreSlot, log_default_fallback
from core.errors import UnsupportedTypeError
from core.property_key import PropertyKey
from core.types import MISSING, Missing
from core.value_domain import ensure_storable
from store.key_value_store import KeyValueStore

T = TypeVar("T")


class StoredValue(Generic[T]):
    """Non-optional accessor for a storable type.

    Args:
        key: Store key; None or "" defers the key until ``bind_key``.
        default: Value returned while the store holds nothing usable.
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
        ensure_storable(self.value_type)
        self.default: T = _validated(default, self.value_type, "default")
        self.initial = initial if initial is MISSING else _validated(initial, self.value_type, "initial")
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
        """Return the stored value, or the default when absent or unusable.

        Raises:
            KeyNotBoundError: If the key is still deferred.
        """
        raw = self._slot.fetch()
        if raw is None:
            return copy.deepcopy(self.default)
        try:
            return coerce(raw, self.value_type)
        except CoercionError:
            log_default_fallback(self._slot.key.resolve(), "not_coercible")
            return copy.deepcopy(self.default)

    def write(self, new_value: T) -> None:
        """Store a new value.

        Raises:
            KeyNotBoundError: If the key is still deferred.
            UnsupportedTypeError: If the value does not fit the declared type.
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
        self._slot.put(_validated(new_value, self.value_type, "value"))

    def _apply_initial(self) -> None:
        if self.has_initial:
            self._store(self.initial)

    def __repr__(self) -> str:
        return f"StoredValue(key={self._slot.key!r}, default={self.default!r})"


class OptionalStoredValue(Generic[T]):
    """Optional accessor for a storable type.

    Args:
        key: Store key; None or "" defers the key until ``bind_key``.
        value_type: Declared type of present values.
        default: Value returned while the store holds nothing usable.
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
        ensure_storable(value_type)
        self.value_type = value_type
        self.default = None if default is None else _validated(default, value_type, "default")
        if initial is MISSING or initial is None:
            self.initial = initial
        else:
            self.initial = _validated(initial, value_type, "initial")
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
        """Return the stored value, or the default (possibly None)."""
        raw = self._slot.fetch()
        if raw is None:
            return copy.deepcopy(self.default)
        try:
            return coerce(raw, self.value_type)
        except CoercionError:
            log_default_fallback(self._slot.key.resolve(), "not_coercible")
            return copy.deepcopy(self.default)

    def write(self, new_value: T | None) -> None:
        """Store a value; None deletes the entry."""
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
        self._slot.put(_validated(new_value, self.value_type, "value"))

    def _apply_initial(self) -> None:
        if self.has_initial:
            self._store(self.initial)

    def __repr__(self) -> str:
        return f"OptionalStoredValue(key={self._slot.key!r}, default={self.default!r})"


def _validated(candidate: Any, value_type: Any, role: str) -> Any:
    """Coerce a caller-supplied value, rejecting it when it does not fit."""
    try:
        return coerce(candidate, value_type)
    except CoercionError as error:
        raise UnsupportedTypeError(
            f"Invalid {role} {candidate!r}: {error}. "
            f"Pass a value of the declared type {getattr(value_type, '__name__', value_type)}."
        ) from error
