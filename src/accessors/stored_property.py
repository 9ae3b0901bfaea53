"""Declarative stored properties.

Descriptors declared on a class give each instance its own accessor,
created on first access and cached in the instance ``__dict__``. Reading
the attribute reads the store, assigning writes it and ``del`` removes
the entry.

    class UserSettings(PreferenceGroup):
        language = RawStoredProperty("lang", Language.ENGLISH, initial=Language.FINNISH)
        nickname = OptionalStoredProperty("nickname", str)

        def __init__(self, user_id: str, store=None) -> None:
            super().__init__(store)
            self.accessor("nickname").bind_key(f"nickname.{user_id}")

A key of None defers binding to the owning instance, which binds it once
through the accessor; an initial value is written at that moment.
"""

from __future__ import annotations

from typing import Any, Callable

from accessors.raw_stored_value import OptionalRawStoredValue, RawStoredValue
from accessors.storage_manipulation import StorageManipulating, remove_all, reset_all
from accessors.stored_value import OptionalStoredValue, StoredValue
from core.types import MISSING
from core.value_domain import ensure_raw_representable, ensure_storable
from store.key_value_store import KeyValueStore

_GROUP_STORE_ATTR = "_prefkit_store"


class _StoredPropertyDescriptor:
    """Shared descriptor plumbing; subclasses choose the accessor class."""

    def __init__(
        self,
        key: str | None,
        build: Callable[..., StorageManipulating],
        options: dict[str, Any],
    ) -> None:
        self.key = key
        self.name: str | None = None
        self._build = build
        self._options = options

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return self.accessor_for(obj).read()

    def __set__(self, obj: Any, value: Any) -> None:
        self.accessor_for(obj).write(value)

    def __delete__(self, obj: Any) -> None:
        self.accessor_for(obj).remove_from_store()

    @property
    def attribute_name(self) -> str:
        return f"_{self.name}_accessor"

    def accessor_for(self, obj: Any) -> Any:
        """Return the accessor owned by obj, creating it on first use."""
        accessor = obj.__dict__.get(self.attribute_name)
        if accessor is None:
            store = self._options.get("store")
            if store is None:
                store = getattr(obj, _GROUP_STORE_ATTR, None)
            options = {**self._options, "store": store}
            accessor = self._build(self.key, **options)
            obj.__dict__[self.attribute_name] = accessor
        return accessor


class StoredProperty(_StoredPropertyDescriptor):
    """Descriptor for a non-optional storable value."""

    def __init__(
        self,
        key: str | None,
        default: Any,
        *,
        value_type: Any = None,
        initial: Any = MISSING,
        store: KeyValueStore | None = None,
        read_only: bool = False,
        strict_keys: bool | None = None,
    ) -> None:
        ensure_storable(value_type if value_type is not None else type(default))
        super().__init__(
            key,
            StoredValue,
            {
                "default": default,
                "value_type": value_type,
                "initial": initial,
                "store": store,
                "read_only": read_only,
                "strict_keys": strict_keys,
            },
        )


class OptionalStoredProperty(_StoredPropertyDescriptor):
    """Descriptor for an optional storable value."""

    def __init__(
        self,
        key: str | None,
        value_type: Any,
        *,
        default: Any = None,
        initial: Any = MISSING,
        store: KeyValueStore | None = None,
        read_only: bool = False,
        strict_keys: bool | None = None,
    ) -> None:
        ensure_storable(value_type)
        super().__init__(
            key,
            OptionalStoredValue,
            {
                "value_type": value_type,
                "default": default,
                "initial": initial,
                "store": store,
                "read_only": read_only,
                "strict_keys": strict_keys,
            },
        )


class RawStoredProperty(_StoredPropertyDescriptor):
    """Descriptor for a non-optional raw-representable value."""

    def __init__(
        self,
        key: str | None,
        default: Any,
        *,
        value_type: Any = None,
        initial: Any = MISSING,
        store: KeyValueStore | None = None,
        read_only: bool = False,
        strict_keys: bool | None = None,
    ) -> None:
        ensure_raw_representable(value_type if value_type is not None else type(default))
        super().__init__(
            key,
            RawStoredValue,
            {
                "default": default,
                "value_type": value_type,
                "initial": initial,
                "store": store,
                "read_only": read_only,
                "strict_keys": strict_keys,
            },
        )


class OptionalRawStoredProperty(_StoredPropertyDescriptor):
    """Descriptor for an optional raw-representable value."""

    def __init__(
        self,
        key: str | None,
        value_type: Any,
        *,
        default: Any = None,
        initial: Any = MISSING,
        store: KeyValueStore | None = None,
        read_only: bool = False,
        strict_keys: bool | None = None,
    ) -> None:
        ensure_raw_representable(value_type)
        super().__init__(
            key,
            OptionalRawStoredValue,
            {
                "value_type": value_type,
                "default": default,
                "initial": initial,
                "store": store,
                "read_only": read_only,
                "strict_keys": strict_keys,
            },
        )


def stored_property(key: str | None, default: Any, **options: Any) -> StoredProperty:
    """Declare a non-optional storable property.

    Keyword options match ``StoredProperty``: value_type, initial, store,
    read_only and strict_keys.
    """
    return StoredProperty(key, default, **options)


def optional_property(key: str | None, value_type: Any, **options: Any) -> OptionalStoredProperty:
    """Declare an optional storable property."""
    return OptionalStoredProperty(key, value_type, **options)


def raw_property(key: str | None, default: Any, **options: Any) -> RawStoredProperty:
    """Declare a non-optional raw-representable property."""
    return RawStoredProperty(key, default, **options)


def optional_raw_property(key: str | None, value_type: Any, **options: Any) -> OptionalRawStoredProperty:
    """Declare an optional raw-representable property."""
    return OptionalRawStoredProperty(key, value_type, **options)


def stored_property_names(owner: type) -> list[str]:
    """Return the names of stored properties declared on a class and its bases."""
    names: list[str] = []
    for klass in reversed(owner.__mro__):
        for name, attribute in vars(klass).items():
            if isinstance(attribute, _StoredPropertyDescriptor) and name not in names:
                names.append(name)
    return names


def accessor_of(obj: Any, name: str) -> Any:
    """Return the accessor behind a stored property of obj.

    Raises:
        AttributeError: If name is not a stored property of obj's class.
    """
    descriptor = _find_descriptor(type(obj), name)
    if descriptor is None:
        raise AttributeError(f"{type(obj).__name__} has no stored property '{name}'")
    return descriptor.accessor_for(obj)


def _find_descriptor(owner: type, name: str) -> _StoredPropertyDescriptor | None:
    for klass in owner.__mro__:
        attribute = vars(klass).get(name)
        if isinstance(attribute, _StoredPropertyDescriptor):
            return attribute
    return None


class PreferenceGroup:
    """Base class for objects made of stored properties.

    Every declared accessor is created in ``__init__`` so initial values
    reach the store at construction time.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        setattr(self, _GROUP_STORE_ATTR, store)
        for name in stored_property_names(type(self)):
            accessor_of(self, name)

    def accessor(self, name: str) -> Any:
        """Return the accessor behind the named stored property."""
        return accessor_of(self, name)

    def accessors(self) -> list[Any]:
        """Return the accessors of every stored property, in declaration order."""
        return [accessor_of(self, name) for name in stored_property_names(type(self))]

    def reset_stored_values(self) -> None:
        """Restore every stored property to its initial state."""
        reset_all(self.accessors())

    def remove_stored_values(self) -> None:
        """Remove every stored property's entry from the store."""
        remove_all(self.accessors())
