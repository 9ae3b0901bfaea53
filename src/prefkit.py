"""Public SDK surface for prefkit.

This module provides a stable import path for library users.
It re-exports the accessors, stores, key cell and error types.
"""

from __future__ import annotations

from accessors.raw_stored_value import OptionalRawStoredValue, RawStoredValue
from accessors.storage_manipulation import StorageManipulating, remove_all, reset_all
from accessors.stored_property import (
    OptionalRawStoredProperty,
    OptionalStoredProperty,
    PreferenceGroup,
    RawStoredProperty,
    StoredProperty,
    accessor_of,
    optional_property,
    optional_raw_property,
    raw_property,
    stored_property,
)
from accessors.stored_value import OptionalStoredValue, StoredValue
from core.config import PrefkitConfig
from core.errors import (
    KeyAlreadyBoundError,
    KeyNotBoundError,
    PrefkitConfigError,
    PrefkitError,
    PrefkitStoreError,
    UnsupportedTypeError,
)
from core.property_key import PropertyKey
from core.types import MISSING, StorableValue
from core.value_domain import RawRepresentable, is_raw_representable, is_storable
from store.default_store import get_default_store, reset_default_store, set_default_store
from store.key_value_store import KeyValueStore
from store.memory_store import MemoryStore
from store.plist_store import PlistFileStore

__all__ = [
    "KeyAlreadyBoundError",
    "KeyNotBoundError",
    "KeyValueStore",
    "MISSING",
    "MemoryStore",
    "OptionalRawStoredProperty",
    "OptionalRawStoredValue",
    "OptionalStoredProperty",
    "OptionalStoredValue",
    "PlistFileStore",
    "PreferenceGroup",
    "PrefkitConfig",
    "PrefkitConfigError",
    "PrefkitError",
    "PrefkitStoreError",
    "PropertyKey",
    "RawRepresentable",
    "RawStoredProperty",
    "RawStoredValue",
    "StorableValue",
    "StorageManipulating",
    "StoredProperty",
    "StoredValue",
    "UnsupportedTypeError",
    "accessor_of",
    "get_default_store",
    "is_raw_representable",
    "is_storable",
    "optional_property",
    "optional_raw_property",
    "raw_property",
    "remove_all",
    "reset_all",
    "reset_default_store",
    "set_default_store",
    "stored_property",
]
