"""prefkit exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class PrefkitError(Exception):
    """Base exception for all prefkit failures."""


class PrefkitConfigError(PrefkitError):
    """Raised for invalid runtime configuration."""


class KeyNotBoundError(PrefkitError):
    """Raised when a fixed key is required but the key is still deferred."""


class KeyAlreadyBoundError(PrefkitError):
    """Raised by strict keys when rebinding to a different key string."""


class UnsupportedTypeError(PrefkitError):
    """Raised for types or values outside the storable value domain."""


class PrefkitStoreError(PrefkitError):
    """Raised for key-value store load and save failures."""
