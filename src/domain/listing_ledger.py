from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Iterable, Iterator

from .listing import Listing


class LedgerFullError(Exception):
    def __init__(self, *, capacity: int, listing_id: int) -> None:
        self.capacity = capacity
        self.listing_id = listing_id
        message = f"Ledger is full ({capacity} listings); listing {listing_id} was not added"
        super().__init__(message)


class LedgerBusyError(RuntimeError):
    def __init__(self, listing_id: int) -> None:
        self.listing_id = listing_id
        super().__init__(f"Listing {listing_id} is being edited; the ledger cannot change until the edit ends")


class ListingLedger:
    """Ordered collection of listings.

    Insertion order is preserved and never re-sorted. Identifiers are not
    required to be unique: lookups, removals and edits act on the first match.
    """

    def __init__(self, listings: Iterable[Listing] = (), *, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._listings: list[Listing] = []
        self._editing: int | None = None
        for listing in listings:
            self.append(listing)

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def append(self, listing: Listing) -> None:
        self._check_not_editing()
        if self._capacity is not None and len(self._listings) >= self._capacity:
            raise LedgerFullError(capacity=self._capacity, listing_id=listing.id)
        self._listings.append(listing)

    def find(self, listing_id: int) -> Listing | None:
        index = self._index_of(listing_id)
        return None if index is None else self._listings[index]

    def remove(self, listing_id: int) -> bool:
        self._check_not_editing()
        index = self._index_of(listing_id)
        if index is None:
            return False
        del self._listings[index]
        return True

    @contextmanager
    def editing(self, listing_id: int) -> Iterator[Listing | None]:
        """Yield the first listing with ``listing_id`` for in-place changes, or None.

        Appends and removals are refused until the block exits, and edits may not nest.
        """
        self._check_not_editing()
        self._editing = listing_id
        try:
            yield self.find(listing_id)
        finally:
            self._editing = None

    def adjust_price(self, listing_id: int, reduction: Decimal) -> Listing | None:
        with self.editing(listing_id) as listing:
            if listing is None:
                return None
            listing.price = listing.price - reduction
            return listing

    def listing_ids(self) -> Iterator[int]:
        return (listing.id for listing in self._listings)

    def is_empty(self) -> bool:
        return not self._listings

    def __iter__(self) -> Iterator[Listing]:
        return iter(self._listings)

    def __len__(self) -> int:
        return len(self._listings)

    def _check_not_editing(self) -> None:
        if self._editing is not None:
            raise LedgerBusyError(self._editing)

    def _index_of(self, listing_id: int) -> int | None:
        for index, listing in enumerate(self._listings):
            if listing.id == listing_id:
                return index
        return None


__all__ = ["LedgerBusyError", "LedgerFullError", "ListingLedger"]
