"""Plist file backed key-value store.

This module persists preferences the way OS preference stores do: one
property list file holding a top-level dictionary. The file is read on
first access and rewritten atomically after every mutation.
"""

from __future__ import annotations

import copy
from datetime import datetime
import os
from pathlib import Path
import plistlib
import threading

from core.constants import DEFAULT_STORE_FORMAT, PLIST_TEMP_SUFFIX, SUPPORTED_STORE_FORMATS
from core.errors import PrefkitStoreError, UnsupportedTypeError
from core.logging_config import get_logger
from core.types import StorableValue
from store.key_value_store import validate_storable_value

_LOGGER = get_logger(__name__)

_PLIST_FORMATS = {
    "xml": plistlib.FMT_XML,
    "binary": plistlib.FMT_BINARY,
}


class PlistFileStore:
    """Store backed by a single plist file on disk."""

    def __init__(self, path: Path, store_format: str = DEFAULT_STORE_FORMAT) -> None:
        if store_format not in SUPPORTED_STORE_FORMATS:
            raise PrefkitStoreError(
                f"Unsupported plist format '{store_format}'. "
                f"Use one of: {', '.join(SUPPORTED_STORE_FORMATS)}."
            )
        self._path = path
        self._format = _PLIST_FORMATS[store_format]
        self._values: dict[str, StorableValue] | None = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> StorableValue | None:
        with self._lock:
            return copy.deepcopy(self._loaded().get(key))

    def set(self, key: str, value: StorableValue) -> None:
        if value is None:
            self.remove(key)
            return
        validate_storable_value(key, value)
        _validate_plist_datetimes(key, value)
        with self._lock:
            updated = {**self._loaded(), key: copy.deepcopy(value)}
            self._save(updated)
            self._values = updated
        _LOGGER.debug("store_set", key=key, store="plist", path=str(self._path))

    def remove(self, key: str) -> None:
        with self._lock:
            values = self._loaded()
            if key not in values:
                return
            updated = {item_key: item for item_key, item in values.items() if item_key != key}
            self._save(updated)
            self._values = updated
        _LOGGER.debug("store_remove", key=key, store="plist", path=str(self._path))

    def contains(self, key: str) -> bool:
        """Return whether key currently holds a value."""
        with self._lock:
            return key in self._loaded()

    def keys(self) -> list[str]:
        """Return stored keys in sorted order."""
        with self._lock:
            return sorted(self._loaded())

    def snapshot(self) -> dict[str, StorableValue]:
        """Return a deep copy of all stored values."""
        with self._lock:
            return copy.deepcopy(self._loaded())

    def reload(self) -> None:
        """Drop cached contents so the next access rereads the file."""
        with self._lock:
            self._values = None

    def _loaded(self) -> dict[str, StorableValue]:
        if self._values is None:
            self._values = _read_plist_file(self._path)
        return self._values

    def _save(self, values: dict[str, StorableValue]) -> None:
        temp_path = self._path.with_name(self._path.name + PLIST_TEMP_SUFFIX)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("wb") as handle:
                plistlib.dump(values, handle, fmt=self._format, sort_keys=True)
            os.replace(temp_path, self._path)
        except (OSError, TypeError, OverflowError) as error:
            temp_path.unlink(missing_ok=True)
            raise PrefkitStoreError(
                f"Failed to write preferences file at {self._path}: {error}. "
                "Check that the directory is writable."
            ) from error


def _read_plist_file(path: Path) -> dict[str, StorableValue]:
    """Read a plist preferences file; a missing file is an empty store."""
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            payload = plistlib.load(handle)
    except (OSError, plistlib.InvalidFileException, ValueError) as error:
        raise PrefkitStoreError(
            f"Failed to read preferences file at {path}: {error}. "
            "Delete or repair the file and retry."
        ) from error
    if not isinstance(payload, dict):
        raise PrefkitStoreError(
            f"Preferences file at {path} does not hold a top-level dictionary. "
            "Delete or repair the file and retry."
        )
    return payload


def _validate_plist_datetimes(key: str, value: object) -> None:
    """Reject datetimes a plist file cannot hold without loss.

    Plist dates carry no timezone and XML plists keep whole seconds only.

    Raises:
        UnsupportedTypeError: If value holds an aware or sub-second datetime.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None or value.microsecond:
            raise UnsupportedTypeError(
                f"Cannot store datetime {value.isoformat()} under key '{key}' in a plist file. "
                "Use a naive UTC datetime with whole seconds."
            )
        return
    if isinstance(value, dict):
        children = list(value.values())
    elif isinstance(value, (list, tuple)):
        children = list(value)
    else:
        return
    for child in children:
        _validate_plist_datetimes(key, child)
