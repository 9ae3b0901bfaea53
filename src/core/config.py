"""Runtime configuration model for prefkit.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_STORE_FORMAT,
    FALSE_FLAG_VALUES,
    STORE_FORMAT_ENV,
    STORE_PATH_ENV,
    STRICT_KEYS_ENV,
    SUPPORTED_STORE_FORMATS,
    TRUE_FLAG_VALUES,
)
from core.errors import PrefkitConfigError


@dataclass(frozen=True)
class PrefkitConfig:
    """Validated runtime configuration.

    Attributes:
        store_path: Optional plist file backing the process-wide default store.
            When unset, the default store lives in memory only.
        store_format: Plist encoding used when writing the store file.
        strict_keys: Whether deferred keys reject rebinding to a different key.
    """

    store_path: Path | None
    store_format: str
    strict_keys: bool

    @classmethod
    def from_env(cls) -> "PrefkitConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PrefkitConfigError: If environment values are invalid.
        """
        store_path_value = os.getenv(STORE_PATH_ENV)
        store_format = _parse_store_format(os.getenv(STORE_FORMAT_ENV, DEFAULT_STORE_FORMAT))
        strict_keys = _parse_flag(STRICT_KEYS_ENV, os.getenv(STRICT_KEYS_ENV, ""))
        return cls(
            store_path=Path(store_path_value).expanduser().resolve() if store_path_value else None,
            store_format=store_format,
            strict_keys=strict_keys,
        )


def _parse_store_format(raw_value: str) -> str:
    """Validate the plist store format value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized format name.

    Raises:
        PrefkitConfigError: If the format is not supported.
    """
    normalized = raw_value.strip().lower()
    if normalized not in SUPPORTED_STORE_FORMATS:
        raise PrefkitConfigError(
            f"Invalid {STORE_FORMAT_ENV} value: "
            f"expected one of {', '.join(SUPPORTED_STORE_FORMATS)}, got '{raw_value}'. "
            f"Set {STORE_FORMAT_ENV} to a supported plist format."
        )
    return normalized


def _parse_flag(env_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        env_name: Variable name, used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag value.

    Raises:
        PrefkitConfigError: If value is not a recognized boolean literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_FLAG_VALUES:
        return True
    if normalized in FALSE_FLAG_VALUES:
        return False
    raise PrefkitConfigError(
        f"Invalid {env_name} value: expected a boolean flag, got '{raw_value}'. "
        f"Set {env_name} to 1 or 0."
    )
