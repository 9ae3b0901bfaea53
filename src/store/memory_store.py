"""In-memory key-value store.

Used as the process default when no store file is configured, and as the
isolated store substituted in tests.
"""

from __future__ import annotations

import copy
import threading
from typing import Mapping

from core.logging_config import get_logger
from core.types import StorableValue
from store.key_value_store import validate_storable_value

_LOGGER = get_logger(__name__)


class MemoryStore:
    """Dictionary-backed store with the KeyValueStore interface."""

    def __init__(self, initial: Mapping[str, StorableValue] | None = None) -> None:
        self._values: dict[str, StorableValue] = {}
        self._lock = threading.Lock()
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> StorableValue | None:
        with self._lock:
            return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: StorableValue) -> None:
        if value is None:
            self.remove(key)
            return
        validate_storable_value(key, value)
        with self._lock:
            self._values[key] = copy.deepcopy(value)
        _LOGGER.debug("store_set", key=key, store="memory")

    def remove(self, key: str) -> None:
        with self._lock:
            removed = self._values.pop(key, None) is not None
        if removed:
            _LOGGER.debug("store_remove", key=key, store="memory")

    def contains(self, key: str) -> bool:
        """Return whether key currently holds a value."""
        with self._lock:
            return key in self._values

    def keys(self) -> list[str]:
        """Return stored keys in sorted order."""
        with self._lock:
            return sorted(self._values)

    def snapshot(self) -> dict[str, StorableValue]:
        """Return a deep copy of all stored values."""
        with self._lock:
            return copy.deepcopy(self._values)

    def clear(self) -> None:
        """Remove every stored value."""
        with self._lock:
            self._values.clear()
