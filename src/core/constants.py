"""Core constants used across prefkit modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

STORE_PATH_ENV = "PREFKIT_STORE_PATH"
STORE_FORMAT_ENV = "PREFKIT_STORE_FORMAT"
STRICT_KEYS_ENV = "PREFKIT_STRICT_KEYS"
DEFAULT_STORE_FORMAT = "xml"
SUPPORTED_STORE_FORMATS = ("xml", "binary")
TRUE_FLAG_VALUES = ("1", "true", "yes", "on")
FALSE_FLAG_VALUES = ("0", "false", "no", "off", "")
PLIST_TEMP_SUFFIX = ".tmp"
CLI_VALUE_TYPES = ("str", "int", "float", "bool")
DEFAULT_LOG_LEVEL = "INFO"
