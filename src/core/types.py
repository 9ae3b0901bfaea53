"""Shared typed models.

This module defines the storable value domain aliases and the sentinel
used to tell "no initial value" apart from an initial value of None.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Union

StorableScalar = Union[bool, int, float, str, datetime, bytes]
StorableValue = Union[StorableScalar, List["StorableValue"], Dict[str, "StorableValue"]]


class Missing(Enum):
    """Marker type for arguments that were not supplied."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = Missing.MISSING
