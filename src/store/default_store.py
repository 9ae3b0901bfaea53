"""Process-wide default store.

Accessors constructed without an explicit store use the instance held
here. It is built once from environment configuration and lives for the
rest of the process; tests substitute an isolated store instead.
"""

from __future__ import annotations

import threading

from core.config import PrefkitConfig
from core.logging_config import get_logger
from store.key_value_store import KeyValueStore
from store.memory_store import MemoryStore
from store.plist_store import PlistFileStore

_LOGGER = get_logger(__name__)
_LOCK = threading.Lock()
_DEFAULT_STORE: KeyValueStore | None = None
_DEFAULT_CONFIG: PrefkitConfig | None = None


def get_default_config() -> PrefkitConfig:
    """Return the process configuration, parsed on first use."""
    global _DEFAULT_CONFIG
    with _LOCK:
        if _DEFAULT_CONFIG is None:
            _DEFAULT_CONFIG = PrefkitConfig.from_env()
        return _DEFAULT_CONFIG


def get_default_store() -> KeyValueStore:
    """Return the process-wide store, creating it on first use."""
    global _DEFAULT_STORE
    config = get_default_config()
    with _LOCK:
        if _DEFAULT_STORE is None:
            _DEFAULT_STORE = build_store(config)
        return _DEFAULT_STORE


def set_default_store(store: KeyValueStore) -> None:
    """Replace the process-wide store."""
    global _DEFAULT_STORE
    with _LOCK:
        _DEFAULT_STORE = store


def reset_default_store() -> None:
    """Forget the process-wide store and config so both are rebuilt lazily."""
    global _DEFAULT_STORE, _DEFAULT_CONFIG
    with _LOCK:
        _DEFAULT_STORE = None
        _DEFAULT_CONFIG = None


def build_store(config: PrefkitConfig) -> KeyValueStore:
    """Build the store selected by configuration.

    Args:
        config: Runtime configuration.

    Returns:
        Plist file store when a store path is configured, memory store otherwise.
    """
    if config.store_path is not None:
        _LOGGER.info("default_store_created", store="plist", path=str(config.store_path))
        return PlistFileStore(config.store_path, config.store_format)
    _LOGGER.info("default_store_created", store="memory")
    return MemoryStore()
