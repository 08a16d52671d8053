from __future__ import annotations

from enum import IntEnum
from typing import NewType

ListingId = NewType("ListingId", int)


class ListingStatus(IntEnum):
    """Listing status; the integer value is the tag written to the listings file."""

    AVAILABLE = 0
    CONTRACT = 1
    SOLD = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()
