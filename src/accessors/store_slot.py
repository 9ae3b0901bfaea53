"""Key and store pairing shared by the accessor variants.

A slot owns the key cell and the store reference of one accessor. It
performs the raw store calls; every typed decision stays in the accessor.
"""

from __future__ import annotations

from core.logging_config import get_logger
from core.property_key import PropertyKey, as_property_key
from core.types import StorableValue
from store.default_store import get_default_config, get_default_store
from store.key_value_store import KeyValueStore

_LOGGER = get_logger(__name__)


class StoreSlot:
    """Raw read/write/remove access to one key of one store."""

    __slots__ = ("key", "store", "read_only")

    def __init__(
        self,
        key: PropertyKey | str | None,
        store: KeyValueStore | None,
        read_only: bool,
        strict_keys: bool | None,
    ) -> None:
        if strict_keys is None:
            strict_keys = get_default_config().strict_keys
        self.key = as_property_key(key, strict=strict_keys)
        self.store = store if store is not None else get_default_store()
        self.read_only = read_only

    def fetch(self) -> StorableValue | None:
        """Read the raw entry; requires a bound key."""
        return self.store.get(self.key.resolve())

    def put(self, raw: StorableValue) -> None:
        """Write a raw entry; requires a bound key."""
        self.store.set(self.key.resolve(), raw)

    def delete(self) -> None:
        """Delete the entry; requires a bound key."""
        self.store.remove(self.key.resolve())

    def delete_if_bound(self) -> None:
        """Delete the entry, doing nothing while the key is deferred."""
        if not self.key.is_bound:
            _LOGGER.debug("remove_skipped_deferred_key")
            return
        self.delete()

    def writes_ignored(self) -> bool:
        """Return whether a property write must be dropped."""
        if self.read_only:
            _LOGGER.debug("read_only_write_ignored", key=self.key.raw_key)
        return self.read_only


def log_default_fallback(key: str, reason: str) -> None:
    """Record that a read returned the default value."""
    _LOGGER.debug("default_fallback", key=key, reason=reason)
