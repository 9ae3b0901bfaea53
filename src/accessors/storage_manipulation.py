"""Uniform reset and remove across accessor variants.

Every accessor variant satisfies ``StorageManipulating`` structurally, so
callers holding a mixed collection of accessors can restore or clear them
without knowing their value types.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from core.logging_config import get_logger
from core.property_key import PropertyKey

_LOGGER = get_logger(__name__)


@runtime_checkable
class StorageManipulating(Protocol):
    """Capability to restore or clear an accessor's store entry."""

    @property
    def key(self) -> PropertyKey:
        """Key cell of the accessor."""

    def reset_to_initial(self) -> None:
        """Write the initial value back, or remove the entry without one."""

    def remove_from_store(self) -> None:
        """Delete the entry; a deferred key or absent entry is a no-op."""


def reset_all(accessors: Iterable[StorageManipulating]) -> int:
    """Reset every accessor to its initial state.

    Args:
        accessors: Accessors of any variant.

    Returns:
        Number of accessors reset.
    """
    count = 0
    for accessor in accessors:
        accessor.reset_to_initial()
        count += 1
    _LOGGER.debug("accessors_reset", count=count)
    return count


def remove_all(accessors: Iterable[StorageManipulating]) -> int:
    """Remove the store entry of every accessor.

    Args:
        accessors: Accessors of any variant.

    Returns:
        Number of accessors processed.
    """
    count = 0
    for accessor in accessors:
        accessor.remove_from_store()
        count += 1
    _LOGGER.debug("accessors_removed", count=count)
    return count
